#!/usr/bin/env python3
"""
Validateur de variables d'environnement pour le client WebSocket.

Ce module détecte et signale les variables d'environnement inconnues
pour aider à identifier les fautes de frappe.
"""

import os
from typing import Set

from loguru import logger


# Variables d'environnement valides pour la configuration
VALID_ENV_VARS = {
    "BITFINEX_API_KEY",
    "BITFINEX_API_SECRET",
    "BITFINEX_WS_URL",
    "WS_TLS_SKIP_VERIFY",
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_FILE",
    "LOG_ROTATION",
    "LOG_RETENTION",
    "LOG_COMPRESSION",
    "SINK_MAXSIZE",
    "BOOK_LENGTH",
    "TIMEOUT_WEBSOCKET_HANDSHAKE",
    "TIMEOUT_THREAD_SHUTDOWN",
}

# Préfixes des variables propres au client
CLIENT_PREFIXES = ("BITFINEX_", "BFX_", "WS_", "SINK_", "BOOK_")


def is_client_related(var_name: str) -> bool:
    """Vérifie si une variable d'environnement semble liée au client."""
    return var_name.upper().startswith(CLIENT_PREFIXES)


def find_unknown_client_variables() -> Set[str]:
    """
    Trouve toutes les variables d'environnement inconnues liées au client.

    Returns:
        Set[str]: Ensemble des variables inconnues liées au client
    """
    unknown_vars = set(os.environ.keys()) - VALID_ENV_VARS
    return {var for var in unknown_vars if is_client_related(var)}


def validate_environment_variables() -> None:
    """
    Valide les variables d'environnement et journalise un avertissement
    pour chaque variable inconnue liée au client.
    """
    unknown = find_unknown_client_variables()
    if not unknown:
        return

    for var in sorted(unknown):
        logger.warning(f"⚠️ Variable d'environnement inconnue ignorée: {var}")
    logger.warning(f"💡 Variables valides: {', '.join(sorted(VALID_ENV_VARS))}")
