#!/usr/bin/env python3
"""
Client WebSocket privé Bitfinex (API v1) avec authentification.

╔═══════════════════════════════════════════════════════════════════╗
║                    📖 GUIDE DE LECTURE                            ║
╚═══════════════════════════════════════════════════════════════════╝

Ce fichier implémente le pipeline privé :
    Auth → Boucle de lecture → Classifieur → Routeur par term → Sink

🔐 MACHINE D'ÉTATS :

    CONNECTING ──> AUTHENTICATING ──> STREAMING ──> CLOSED
         │               │                │
         └───────────────┴────────────────┴──> CLOSED (1 TermData d'erreur)

1. CONNECTING : ouverture du transport
2. AUTHENTICATING : envoi de
       {"event": "auth", "apiKey": ..., "authSig": ..., "authPayload": "AUTH<timestamp>"}
   puis attente de {"event": "auth", "status": "OK", "chanId": 0, "userId": ...}
3. STREAMING : chaque trame [0, term, payload] produit un ou plusieurs TermData
4. Toute erreur de transport ou refus d'auth : un seul TermData portant
   uniquement le champ error, fermeture du transport, fin de la boucle

Exemple de signature :
    payload = "AUTH1712345738"
    authSig = HMAC-SHA384(payload, api_secret) -> hex string

📚 EXEMPLE D'UTILISATION :

```python
import queue
from ws_private import PrivateWSClient

records = queue.Queue()
client = PrivateWSClient(api_key="KEY", api_secret="SECRET")
client.connect_private(records)  # bloquant

record = records.get()
if record.has_error():
    print(record.error)
else:
    print(record.term, record.data)
```

Note:
    - Pas de reconnexion : après un TermData d'erreur, la connexion est terminée
    - Les données reçues avant la confirmation d'auth sont ignorées
"""

import json
import threading
from typing import Any, Callable, Optional

from config.urls import URLConfig
from exceptions import AuthenticationError, ConfigurationError, WebSocketConnectionError
from interfaces.transport_interface import TransportInterface
from logging_setup import setup_logging
from ws.private.auth import AuthManager
from ws.private.models import AuthResponse, PrivateState, TermData
from ws.private.router import PrivateMessageRouter
from ws.transport import connect_transport


class PrivateWSClient:
    """
    Client WebSocket privé Bitfinex.

    Attributes:
        url (str): URL WebSocket
        state (PrivateState): État courant de la machine d'états
        transport (TransportInterface | None): Transport de la connexion en cours
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_secret: Optional[str] = None,
        signer: Optional[Callable[[str], str]] = None,
        url: Optional[str] = None,
        tls_skip_verify: bool = False,
        logger=None,
        transport_factory: Optional[Callable[..., TransportInterface]] = None,
    ) -> None:
        """
        Initialise le client WebSocket privé.

        Args:
            api_key: Clé API Bitfinex
            api_secret: Secret API (signature HMAC-SHA384 par défaut)
            signer: Fonction de signature externe signer(payload) -> str,
                    prioritaire sur api_secret
            url: URL WebSocket (défaut: BITFINEX_WS_URL ou URLConfig.DEFAULT_WS_URL)
            tls_skip_verify: Ne pas vérifier le certificat du serveur
            logger: Instance du logger (défaut: setup_logging())
            transport_factory: Connecteur remplaçable dans les tests

        Raises:
            ValueError: Si la clé API ou le moyen de signature manquent
        """
        self.url = URLConfig.get_websocket_url(url)
        self.tls_skip_verify = bool(tls_skip_verify)
        self.logger = logger or setup_logging()
        self._transport_factory = transport_factory or connect_transport
        self._auth_manager = AuthManager(api_key, api_secret, signer)
        self.transport: Optional[TransportInterface] = None
        self.state = PrivateState.CLOSED
        self._closing = False
        self._lock = threading.Lock()

    def close(self) -> None:
        """
        Ferme la connexion ; la boucle se termine sans TermData d'erreur.

        La fermeture est définitive, y compris pendant le handshake.
        """
        with self._lock:
            self._closing = True
            transport = self.transport
        if transport:
            transport.close()

    def connect_private(self, sink: Any) -> None:
        """
        Se connecte, s'authentifie et livre les TermData dans sink jusqu'à la
        première erreur. Bloquant.

        Args:
            sink: Destination des enregistrements (objet avec put())
        """
        try:
            self._run(sink)
        except WebSocketConnectionError as e:
            if self._closing:
                self.logger.info("🏁 WS privée arrêtée")
            else:
                self._emit_error(sink, e)
        except AuthenticationError as e:
            self._emit_error(sink, e)
        finally:
            if self.transport:
                self.transport.close()
            self.state = PrivateState.CLOSED

    def _emit_error(self, sink: Any, error: Exception) -> None:
        self.logger.error(f"⛔ WS privée terminée: {error}")
        sink.put(TermData(error=str(error)))

    def _run(self, sink: Any) -> None:
        self.state = PrivateState.CONNECTING
        with self._lock:
            self.transport = None
            if self._closing:
                self.logger.info("🛑 Client fermé, connexion privée annulée")
                return

        self.logger.info("🔐 Connexion à la WebSocket privée…")
        transport = self._transport_factory(self.url, tls_skip_verify=self.tls_skip_verify)
        with self._lock:
            self.transport = transport
            closing = self._closing
        if closing:
            # Le finally de connect_private ferme le transport
            self.logger.info("🔌 Fermeture demandée pendant la connexion privée")
            return

        self.state = PrivateState.AUTHENTICATING
        auth_message, _ = self._auth_manager.build_auth_message()
        transport.send(json.dumps(auth_message))
        self.logger.info("🪪 Authentification en cours…")

        router = PrivateMessageRouter(on_record=sink.put, logger=self.logger)
        while True:
            message = transport.recv()
            event = router.route(message, streaming=self.state is PrivateState.STREAMING)
            if event is not None:
                self._handle_event(event)

    def _handle_event(self, event: AuthResponse) -> None:
        if not event.is_auth:
            self.logger.debug(f"Événement privé ignoré: {event.event}")
            return
        if not event.is_ok:
            raise AuthenticationError(
                f"Échec d'authentification WS privée (status={event.status or 'absent'})"
            )
        if self.state is PrivateState.AUTHENTICATING:
            self.state = PrivateState.STREAMING
            self.logger.info(f"✅ Authentification réussie (userId={event.user_id}, chanId={event.chan_id})")


def create_private_ws_client(
    settings: Optional[dict] = None,
    logger=None,
    transport_factory: Optional[Callable[..., TransportInterface]] = None,
) -> PrivateWSClient:
    """
    Construit un PrivateWSClient depuis la configuration.

    Raises:
        ConfigurationError: Si BITFINEX_API_KEY ou BITFINEX_API_SECRET manquent
    """
    if settings is None:
        from config import get_settings
        settings = get_settings()

    if not settings.get("api_key") or not settings.get("api_secret"):
        raise ConfigurationError(
            "🔐 Clés API manquantes. Configurez BITFINEX_API_KEY et BITFINEX_API_SECRET "
            "dans votre fichier .env."
        )
    return PrivateWSClient(
        api_key=settings["api_key"],
        api_secret=settings["api_secret"],
        url=settings.get("ws_url"),
        tls_skip_verify=settings.get("tls_skip_verify", False),
        logger=logger,
        transport_factory=transport_factory,
    )
