#!/usr/bin/env python3
"""
Façade WebSocket pour le client Bitfinex.

Ce module orchestre les deux pipelines indépendants :
- PublicWSClient : canaux book / trades / ticker, routés par chanId
- PrivateWSClient : canal authentifié, enregistrements routés par term
- WebSocketConnectionPool : un thread de lecture par connexion

Les deux pipelines ne partagent aucun état.
"""

import concurrent.futures
import queue
from typing import Any, Callable, Dict, Optional

from config import get_settings
from config.constants import DEFAULT_SINK_MAXSIZE
from exceptions import ConfigurationError
from interfaces.transport_interface import TransportInterface
from interfaces.websocket_manager_interface import WebSocketServiceInterface
from logging_setup import setup_logging
from ws_private import PrivateWSClient, create_private_ws_client
from ws_public import PublicWSClient

from .connection_pool import WebSocketConnectionPool


class WebSocketService(WebSocketServiceInterface):
    """
    Façade des connexions publique et privée.

    Responsabilités :
    - Construire les clients depuis la configuration
    - Lancer chaque boucle de lecture dans son thread
    - Fermer les transports et arrêter le pool
    """

    def __init__(
        self,
        public_client: PublicWSClient,
        private_client: Optional[PrivateWSClient] = None,
        logger=None,
        sink_maxsize: int = DEFAULT_SINK_MAXSIZE,
    ):
        self.logger = logger or setup_logging()
        self.public = public_client
        self.private = private_client
        self.sink_maxsize = sink_maxsize
        self._pool = WebSocketConnectionPool(self.logger)
        self.running = False

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Dict] = None,
        logger=None,
        transport_factory: Optional[Callable[..., TransportInterface]] = None,
    ) -> "WebSocketService":
        """
        Construit la façade depuis get_settings() (ou un dict équivalent).

        Le client privé n'est créé que si api_key et api_secret sont renseignés.
        """
        if settings is None:
            settings = get_settings()
        logger = logger or setup_logging()

        public = PublicWSClient(
            url=settings.get("ws_url"),
            tls_skip_verify=settings.get("tls_skip_verify", False),
            logger=logger,
            transport_factory=transport_factory,
        )

        private = None
        if settings.get("api_key") and settings.get("api_secret"):
            private = create_private_ws_client(settings, logger, transport_factory)
        else:
            logger.warning("⚠️ Clés API non configurées, canal privé désactivé")

        return cls(
            public,
            private,
            logger=logger,
            sink_maxsize=settings.get("sink_maxsize", DEFAULT_SINK_MAXSIZE),
        )

    def new_sink(self) -> queue.Queue:
        """Crée une file bornée selon sink_maxsize (0 = illimitée)."""
        return queue.Queue(maxsize=self.sink_maxsize)

    def add_subscribe(self, channel: str, pair: str, length: int, sink: Any) -> None:
        self.public.add_subscribe(channel, pair, length, sink)

    def _ensure_pool(self) -> None:
        if not self._pool.is_running():
            self._pool.create_executor()
        self.running = True

    def _run_public(self) -> None:
        if not self.running:
            return
        self.public.connect()
        self.public.subscribe()

    def start_public(self) -> concurrent.futures.Future:
        self._ensure_pool()
        future = self._pool.submit(self._run_public)
        self.logger.info("✅ Boucle WS publique démarrée")
        return future

    def start_private(self, sink: Any) -> concurrent.futures.Future:
        """
        Raises:
            ConfigurationError: Si aucun client privé n'est configuré
        """
        if self.private is None:
            raise ConfigurationError(
                "Canal privé indisponible : configurez BITFINEX_API_KEY et BITFINEX_API_SECRET"
            )
        self._ensure_pool()
        future = self._pool.submit(self.private.connect_private, sink)
        self.logger.info("✅ Boucle WS privée démarrée")
        return future

    def stop(self) -> None:
        if not self.running:
            return
        self.logger.info("🧹 Arrêt demandé, fermeture des WebSockets…")
        self.running = False
        self.public.close()
        if self.private:
            self.private.close()
        self._pool.shutdown_with_timeout()
        self.logger.info("🏁 WebSockets arrêtées")

    def is_running(self) -> bool:
        return self.running
