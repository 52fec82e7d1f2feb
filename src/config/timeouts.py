#!/usr/bin/env python3
"""
Configuration centralisée des timeouts pour le client WebSocket Bitfinex.

Import :
    from config.timeouts import TimeoutConfig

Utilisation :
    transport = connect_transport(url, timeout=TimeoutConfig.WEBSOCKET_HANDSHAKE)

Note:
    Aucune lecture n'a de timeout une fois la connexion établie : seule
    la fermeture du transport débloque une boucle de lecture.
"""

import os

from loguru import logger


class TimeoutConfig:
    """
    Configuration centralisée des timeouts.

    Tous les timeouts sont en secondes.
    Les valeurs peuvent être surchargées via les variables d'environnement.
    """

    # ===== TIMEOUTS WEBSOCKET =====

    # Timeout du handshake d'ouverture (la lecture reste ensuite bloquante)
    WEBSOCKET_HANDSHAKE = float(os.getenv("TIMEOUT_WEBSOCKET_HANDSHAKE", "3"))

    # ===== TIMEOUTS OPERATIONS =====

    # Timeout pour l'arrêt des threads de lecture
    THREAD_SHUTDOWN = float(os.getenv("TIMEOUT_THREAD_SHUTDOWN", "5"))

    @classmethod
    def get_all_timeouts(cls) -> dict:
        """Timeouts configurés, {nom: secondes}."""
        return {name: value for name, value in vars(cls).items() if name.isupper()}

    @classmethod
    def validate_timeouts(cls) -> bool:
        """
        Raises:
            ValueError: Si un timeout est nul ou négatif
        """
        invalid = {name: value for name, value in cls.get_all_timeouts().items() if value <= 0}
        if invalid:
            raise ValueError(f"Timeouts non positifs : {invalid}")
        return True


# Une valeur invalide venant de l'environnement est signalée dès l'import
try:
    TimeoutConfig.validate_timeouts()
except ValueError as e:
    logger.warning(f"⚠️ Configuration des timeouts invalide : {e}")


__all__ = ["TimeoutConfig"]
