#!/usr/bin/env python3
"""
Connecteur de transport WebSocket basé sur websocket-client.

Ce module ouvre la connexion (handshake, TLS, proxy) et expose un flux
texte bloquant conforme à TransportInterface. Le handshake est borné par
TimeoutConfig.WEBSOCKET_HANDSHAKE ; une fois ouverte, la connexion n'a
plus de timeout de lecture.
"""

import ssl
from typing import Optional

import websocket

from config.constants import WS_SUBPROTOCOLS
from config.timeouts import TimeoutConfig
from exceptions import WebSocketConnectionError
from interfaces.transport_interface import TransportInterface

# Erreurs de transport remontées par websocket-client ou par le socket
TRANSPORT_ERRORS = (websocket.WebSocketException, OSError)


class WebSocketTransport(TransportInterface):
    """Adaptateur autour d'une connexion websocket.WebSocket synchrone."""

    def __init__(self, ws: websocket.WebSocket, url: str = ""):
        self._ws = ws
        self.url = url

    def send(self, message: str) -> None:
        try:
            self._ws.send(message)
        except TRANSPORT_ERRORS as e:
            raise WebSocketConnectionError(f"Échec d'envoi WebSocket: {e}") from e

    def recv(self) -> str:
        try:
            message = self._ws.recv()
        except TRANSPORT_ERRORS as e:
            raise WebSocketConnectionError(f"Échec de lecture WebSocket: {e}") from e

        # Trame de fermeture : websocket-client renvoie une chaîne vide,
        # parfois avant que connected ne passe à False
        if not message:
            raise WebSocketConnectionError("Connexion WebSocket fermée par le serveur")
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return message

    def close(self) -> None:
        try:
            self._ws.close()
        except TRANSPORT_ERRORS:
            # Déjà fermé côté serveur
            pass


def build_sslopt(tls_skip_verify: bool) -> Optional[dict]:
    """Options TLS pour websocket-client (None = vérification par défaut)."""
    if not tls_skip_verify:
        return None
    return {"cert_reqs": ssl.CERT_NONE, "check_hostname": False}


def connect_transport(
    url: str,
    tls_skip_verify: bool = False,
    timeout: Optional[float] = None,
) -> WebSocketTransport:
    """
    Ouvre une connexion WebSocket et retourne le transport associé.

    Le proxy éventuel est lu depuis l'environnement (http_proxy/https_proxy)
    par websocket-client.

    Args:
        url: URL ws:// ou wss://
        tls_skip_verify: Désactiver la vérification du certificat serveur
        timeout: Timeout du handshake (défaut: TimeoutConfig.WEBSOCKET_HANDSHAKE)

    Raises:
        WebSocketConnectionError: Si la connexion échoue
    """
    handshake_timeout = timeout if timeout is not None else TimeoutConfig.WEBSOCKET_HANDSHAKE
    try:
        ws = websocket.create_connection(
            url,
            timeout=handshake_timeout,
            subprotocols=list(WS_SUBPROTOCOLS),
            sslopt=build_sslopt(tls_skip_verify),
        )
    except TRANSPORT_ERRORS as e:
        raise WebSocketConnectionError(f"Connexion WebSocket impossible ({url}): {e}") from e

    # Lecture bloquante sans timeout une fois la connexion établie
    ws.settimeout(None)
    return WebSocketTransport(ws, url)
