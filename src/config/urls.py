#!/usr/bin/env python3
"""
Configuration centralisée des URLs pour le client WebSocket Bitfinex.

Import :
    from config.urls import URLConfig

Utilisation :
    ws_url = URLConfig.get_websocket_url()
"""

import os
import re


class URLConfig:
    """
    Configuration centralisée des URLs.

    L'URL peut être surchargée via la variable d'environnement BITFINEX_WS_URL.
    """

    # URL WebSocket par défaut (API v1, canaux publics et canal privé 0)
    DEFAULT_WS_URL = "wss://api.bitfinex.com/ws"

    DOCS_WEBSOCKET = "https://docs.bitfinex.com/v1/docs/ws-general"

    _WS_PATTERN = re.compile(
        r'^wss?://'  # ws:// ou wss://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|'  # domaine
        r'localhost|'
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # IP
        r'(?::\d+)?'  # port optionnel
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    @classmethod
    def get_websocket_url(cls, override: str = None) -> str:
        """
        Retourne l'URL WebSocket à utiliser.

        Args:
            override: URL explicite (prioritaire sur la configuration)

        Raises:
            ValueError: Si l'URL n'est pas une URL ws:// ou wss:// valide
        """
        url = override or cls.configured_websocket_url()
        if not cls.is_valid_websocket_url(url):
            raise ValueError(f"URL WebSocket invalide : {url}")
        return url

    @classmethod
    def configured_websocket_url(cls) -> str:
        """BITFINEX_WS_URL lu à l'appel (après load_dotenv), sinon l'URL par défaut."""
        return os.getenv("BITFINEX_WS_URL") or cls.DEFAULT_WS_URL

    @classmethod
    def is_valid_websocket_url(cls, url: str) -> bool:
        return bool(url) and cls._WS_PATTERN.match(url) is not None


__all__ = ["URLConfig"]
