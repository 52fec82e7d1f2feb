#!/usr/bin/env python3
"""
Client WebSocket publique Bitfinex (API v1).

╔═══════════════════════════════════════════════════════════════════╗
║                    📖 GUIDE DE LECTURE                            ║
╚═══════════════════════════════════════════════════════════════════╝

Ce fichier implémente le pipeline public :
    Registre de souscriptions → Boucle de lecture → Classifieur → Routeur → Sink

🔍 COMPRENDRE CE FICHIER EN 5 MINUTES :

1. Souscriptions (add_subscribe)
   └─> Chaque demande (canal, paire, profondeur, sink) reste en attente
       jusqu'à la confirmation "subscribed" qui annonce son chanId

2. Boucle de lecture (subscribe)
   └─> Envoie les messages subscribe puis lit les trames une à une,
       dans l'ordre d'arrivée, sur le thread appelant

3. Classification (ws/public/parser_router.py)
   └─> Contrôle si la trame contient "event", données sinon ;
       la forme JSON distingue update / tuple compact / snapshot

📡 FORMAT DES MESSAGES :

Souscription envoyée :
    {"event": "subscribe", "channel": "book", "pair": "BTCUSD", "len": "25"}

Confirmation reçue :
    {"event": "subscribed", "channel": "book", "pair": "BTCUSD", "chanId": 5}

Données reçues :
    [5, [[100.0, 2, 0.5], [99.5, 1, 1.2]]]   → snapshot
    [5, [99.0, 3, -0.4]]                      → update
    [5, "te", "1234-BTCUSD", 1443659698, 236.42, 0.49]  → tuple compact

Chaque snapshot est livré précédé de la ligne sentinelle [0, 0, 0] :
le consommateur doit alors remplacer son état local.

📚 EXEMPLE D'UTILISATION :

```python
import queue
from ws_public import PublicWSClient

book = queue.Queue(maxsize=1000)
client = PublicWSClient()
client.add_subscribe("book", "BTCUSD", 25, book)
client.connect()
client.subscribe()  # bloquant, lever WebSocketConnectionError en cas d'erreur
```

Note:
    - Aucune reconnexion automatique : la relance est à la charge de l'appelant
    - close() depuis un autre thread est le seul moyen de débloquer subscribe() ;
      il est définitif, y compris pendant le handshake de connect()
"""

import json
import threading
from typing import Any, Callable, Dict, Optional

from config.urls import URLConfig
from exceptions import WebSocketConnectionError
from interfaces.transport_interface import TransportInterface
from logging_setup import setup_logging
from ws.public.models import ChannelBinding
from ws.public.parser_router import PublicMessageRouter
from ws.public.subscriptions import SubscriptionRegistry
from ws.transport import connect_transport


class PublicWSClient:
    """
    Client WebSocket publique Bitfinex sans reconnexion.

    Attributes:
        url (str): URL WebSocket
        tls_skip_verify (bool): Désactiver la vérification TLS
        logger: Instance du logger
        transport (TransportInterface | None): Transport ouvert par connect()
        running (bool): True pendant l'exécution de la boucle de lecture
    """

    def __init__(
        self,
        url: Optional[str] = None,
        tls_skip_verify: bool = False,
        logger=None,
        transport_factory: Optional[Callable[..., TransportInterface]] = None,
    ):
        """
        Initialise le client WebSocket publique.

        Args:
            url: URL WebSocket (défaut: BITFINEX_WS_URL ou URLConfig.DEFAULT_WS_URL)
            tls_skip_verify: Ne pas vérifier le certificat du serveur
            logger: Instance du logger (défaut: setup_logging())
            transport_factory: Connecteur (url, tls_skip_verify=...) → transport,
                               remplaçable dans les tests
        """
        self.url = URLConfig.get_websocket_url(url)
        self.tls_skip_verify = bool(tls_skip_verify)
        self.logger = logger or setup_logging()
        self._transport_factory = transport_factory or connect_transport
        self.transport: Optional[TransportInterface] = None
        self.running = False
        self._closing = False
        self._lock = threading.Lock()

        # Registre propre à cette connexion (pas d'état global)
        self._registry = SubscriptionRegistry()
        self._router = PublicMessageRouter(self._registry, self.logger)

    @property
    def bindings(self) -> Dict[float, ChannelBinding]:
        return self._registry.bindings

    def connect(self) -> None:
        """
        Ouvre la connexion WebSocket.

        Si close() est appelé pendant le handshake, le transport tout juste
        ouvert est fermé aussitôt et subscribe() rendra la main sans lire.

        Raises:
            WebSocketConnectionError: Si la connexion échoue
        """
        with self._lock:
            if self._closing:
                self.logger.info("🛑 Client fermé, connexion annulée")
                return
        self.logger.info(f"🌐 Connexion WS publique → {self.url}")
        transport = self._transport_factory(self.url, tls_skip_verify=self.tls_skip_verify)

        with self._lock:
            self.transport = transport
            closing = self._closing
        if closing:
            transport.close()
            self.logger.info("🔌 Fermeture demandée pendant la connexion, WS publique fermée")

    def close(self) -> None:
        """
        Ferme la connexion ; débloque la boucle de lecture.

        La fermeture est définitive : un client fermé ne se reconnecte pas.
        """
        with self._lock:
            self._closing = True
            transport = self.transport
        if transport:
            transport.close()
            self.logger.info("🔌 WS publique fermée")

    def add_subscribe(self, channel: str, pair: str, length: int, sink: Any) -> None:
        """
        Ajoute une souscription en attente.

        Args:
            channel: "book", "trades" ou "ticker"
            pair: Paire de trading (ex: "BTCUSD")
            length: Profondeur demandée (envoyée en texte dans "len")
            sink: Destination des lignes (objet avec put(), ex: queue.Queue)
        """
        self._registry.register(channel, pair, length, sink)

    def clear_subscriptions(self) -> None:
        self._registry.clear()

    def _send_subscribe_messages(self) -> None:
        messages = self._registry.build_handshake_messages()
        for message in messages:
            self.transport.send(json.dumps(message))
        self.logger.info(f"# Souscription → {len(messages)} canal(aux)")

    def subscribe(self) -> None:
        """
        Envoie les souscriptions puis lit les trames jusqu'à l'erreur de transport.

        Raises:
            WebSocketConnectionError: Erreur de transport (résultat terminal de
                la boucle) ; pas levée si close() a été demandé
        """
        with self._lock:
            closing = self._closing
        if closing:
            self.logger.info("🏁 Client fermé, boucle WS publique non démarrée")
            return
        if self.transport is None:
            raise WebSocketConnectionError("WS publique non connectée, appeler connect() d'abord")

        self.running = True
        try:
            self._send_subscribe_messages()
            while True:
                self._router.route(self.transport.recv())
        except WebSocketConnectionError as e:
            if self._closing:
                self.logger.info("🏁 Boucle WS publique arrêtée")
                return
            self.logger.error(f"Erreur connexion WS publique: {e}")
            raise
        finally:
            self.running = False
