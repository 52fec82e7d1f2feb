#!/usr/bin/env python3
from typing import Any, Dict, List, Optional

from config.constants import EVENT_SUBSCRIBE, EVENT_SUBSCRIBED
from .models import ChannelBinding, SubscribeMessage, SubscriptionRequest


class SubscriptionBuilder:
    """Construit les messages de souscription aux canaux publics Bitfinex."""

    @staticmethod
    def subscribe(channel: str, pair: str, length: int) -> Dict:
        return SubscribeMessage(
            event=EVENT_SUBSCRIBE,
            channel=channel,
            pair=pair,
            length=str(length),
        ).to_dict()


class SubscriptionRegistry:
    """
    Registre des souscriptions d'une connexion publique.

    Les demandes restent en attente jusqu'à la confirmation "subscribed"
    qui leur attribue un chanId. La table chanId → sinks n'est lue et
    écrite que par la boucle de lecture propriétaire : pas de verrou.
    """

    def __init__(self) -> None:
        self._pending: List[SubscriptionRequest] = []
        self._bindings: Dict[float, ChannelBinding] = {}

    def register(self, channel: str, pair: str, length: int, sink: Any) -> SubscriptionRequest:
        request = SubscriptionRequest(channel=channel, pair=pair, length=length, sink=sink)
        self._pending.append(request)
        return request

    def clear(self) -> None:
        """Supprime les demandes en attente (les liens existants sont conservés)."""
        self._pending = []

    @property
    def pending(self) -> List[SubscriptionRequest]:
        return list(self._pending)

    @property
    def bindings(self) -> Dict[float, ChannelBinding]:
        return dict(self._bindings)

    def build_handshake_messages(self) -> List[Dict]:
        return [
            SubscriptionBuilder.subscribe(req.channel, req.pair, req.length)
            for req in self._pending
        ]

    def bind(self, event: SubscribeMessage) -> Optional[ChannelBinding]:
        """
        Lie le chanId annoncé à toutes les demandes en attente dont
        (canal, paire) correspond. Les demandes liées quittent la file
        d'attente : un topic n'est jamais ré-associé.

        Returns:
            Le lien créé, ou None si aucune demande ne correspond
        """
        if event.event != EVENT_SUBSCRIBED or event.chan_id is None:
            return None

        topic = (event.channel, event.pair)
        matched = [req for req in self._pending if req.topic == topic]
        if not matched:
            return None

        if event.chan_id in self._bindings:
            # Un chanId n'a qu'un seul lien
            return None

        binding = ChannelBinding(
            chan_id=event.chan_id,
            channel=event.channel,
            pair=event.pair,
            sinks=[req.sink for req in matched],
        )
        self._bindings[event.chan_id] = binding
        self._pending = [req for req in self._pending if req.topic != topic]
        return binding

    def lookup(self, chan_id: float) -> Optional[ChannelBinding]:
        return self._bindings.get(chan_id)
