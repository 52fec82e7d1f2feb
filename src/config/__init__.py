#!/usr/bin/env python3
"""
Package de configuration pour le client WebSocket Bitfinex.

Ce package organise la configuration en modules séparés :
- constants.py : Canaux, paires et marqueurs du protocole
- env_validator.py : Validation des variables d'environnement
- settings_loader.py : Chargement des settings depuis .env / parameters.yaml
- timeouts.py : Timeouts de handshake et d'arrêt
- urls.py : URL WebSocket
"""

from .constants import (
    # Canaux
    CHAN_BOOK,
    CHAN_TRADE,
    CHAN_TICKER,
    # Paires
    KNOWN_PAIRS,
    # Marqueurs
    SNAPSHOT_SENTINEL,
    AUTH_PAYLOAD_PREFIX,
    # Valeurs par défaut
    DEFAULT_BOOK_LENGTH,
    DEFAULT_SINK_MAXSIZE,
)
from .settings_loader import get_settings
from .timeouts import TimeoutConfig
from .urls import URLConfig

__all__ = [
    "get_settings",
    "TimeoutConfig",
    "URLConfig",
    "CHAN_BOOK",
    "CHAN_TRADE",
    "CHAN_TICKER",
    "KNOWN_PAIRS",
    "SNAPSHOT_SENTINEL",
    "AUTH_PAYLOAD_PREFIX",
    "DEFAULT_BOOK_LENGTH",
    "DEFAULT_SINK_MAXSIZE",
]
