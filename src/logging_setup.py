"""Configuration du système de logging avec loguru."""

import os
import re
import sys
from typing import Optional

from loguru import logger

try:
    from .config import get_settings
except ImportError:
    from config import get_settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<7} | {message}"

_configured = False


class SensitiveDataFilter:
    """Filtre qui masque les credentials sensibles dans les logs."""

    PATTERNS = [
        # Message d'auth WebSocket (apiKey / authSig)
        (r'("?apiKey"?["\s:=]+)("?[^"\s,}]+"?)', r'\1***MASKED_API_KEY***'),
        (r'("?authSig"?["\s:=]+)("?[^"\s,}]+"?)', r'\1***MASKED_SIGNATURE***'),
        (r'(\'apiKey\':\s*)([\'"][^\'\"]+[\'"])', r'\1***MASKED_API_KEY***'),
        (r'(\'authSig\':\s*)([\'"][^\'\"]+[\'"])', r'\1***MASKED_SIGNATURE***'),

        # API keys et secrets génériques
        (r'(api[_-]?key["\s:=]+)([a-zA-Z0-9-_]{10,})', r'\1***MASKED_API_KEY***'),
        (r'(api[_-]?secret["\s:=]+)([a-zA-Z0-9-_]{10,})', r'\1***MASKED_API_SECRET***'),

        # Variables d'environnement
        (r'(BITFINEX_API_KEY["\s:=]+)([^"\s,}]+)', r'\1***MASKED***'),
        (r'(BITFINEX_API_SECRET["\s:=]+)([^"\s,}]+)', r'\1***MASKED***'),
    ]

    def __call__(self, record):
        """Filtre les credentials dans le message de log."""
        message = record["message"]
        for pattern, replacement in self.PATTERNS:
            message = re.sub(pattern, replacement, message, flags=re.IGNORECASE)
        record["message"] = message
        return True


def setup_logging(log_level: Optional[str] = None, force: bool = False):
    """
    Configure le système de logging avec loguru.

    La configuration n'est appliquée qu'une fois par processus, sauf si
    force=True ; les appels suivants renvoient simplement le logger.

    Args:
        log_level: Niveau explicite (sinon LOG_LEVEL via get_settings())
        force: Reconfigurer même si déjà fait
    """
    global _configured
    if _configured and not force:
        return logger

    logger.remove()

    if log_level is None:
        log_level = get_settings()["log_level"]

    log_dir = os.getenv("LOG_DIR")
    log_file = os.getenv("LOG_FILE", "bitfinex_ws.log")
    rotation = os.getenv("LOG_ROTATION", "10 MB")
    retention = os.getenv("LOG_RETENTION", "7 days")
    compression = os.getenv("LOG_COMPRESSION", "zip")

    sensitive_filter = SensitiveDataFilter()

    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=log_level,
        colorize=True,
        enqueue=False,
        backtrace=False,
        diagnose=False,
        filter=sensitive_filter,
    )
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            logger.add(
                f"{log_dir}/{log_file}",
                format=LOG_FORMAT,
                level=log_level,
                rotation=rotation,
                retention=retention,
                compression=compression,
                enqueue=True,
                backtrace=False,
                diagnose=False,
                filter=sensitive_filter,
            )
        except OSError as e:
            # Si on ne peut pas créer le fichier, on garde stdout uniquement
            logger.warning(f"⚠️ Fichier de log indisponible ({log_dir}): {e}")

    _configured = True
    return logger
