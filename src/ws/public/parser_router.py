#!/usr/bin/env python3
import json
from typing import Any, Optional

from config.constants import EVENT_ERROR, EVENT_INFO, EVENT_KEYWORD, EVENT_SUBSCRIBED
from .models import DataFrame, FrameShape, SubscribeMessage, _is_number
from .subscriptions import SubscriptionRegistry

_UNRECOGNIZED = DataFrame(FrameShape.UNRECOGNIZED)


def _loads(raw_message: str) -> Any:
    try:
        return json.loads(raw_message)
    except (json.JSONDecodeError, TypeError):
        return None


def _numeric_row(values: Any) -> Optional[tuple]:
    """Convertit une liste de nombres en ligne de floats (None sinon)."""
    if not isinstance(values, list) or not all(_is_number(v) for v in values):
        return None
    return tuple(float(v) for v in values)


class PublicMessageParser:
    """Parse les messages WS publics (contrôle et données)."""

    @staticmethod
    def parse_event(raw_message: str) -> Optional[SubscribeMessage]:
        payload = _loads(raw_message)
        if not isinstance(payload, dict) or "event" not in payload:
            return None
        return SubscribeMessage.from_dict(payload)

    @staticmethod
    def classify_data(payload: Any) -> DataFrame:
        """
        Détermine la forme d'une trame de données à partir de sa seule structure.

        - [chanId, f1, f2, ...] (liste plate de nombres) → UPDATE
        - [chanId, [f1, f2, ...]] → UPDATE
        - [chanId, x, y, f1, f2, ...] (plus de 3 éléments) → COMPACT_TUPLE,
          la ligne est formée des éléments d'index 3 et suivants
        - [chanId, [[...], [...]]] → SNAPSHOT
        - tout le reste → UNRECOGNIZED

        Les formes sont exclusives : une trame ne produit qu'une livraison.
        """
        if not isinstance(payload, list) or len(payload) < 2 or not _is_number(payload[0]):
            return _UNRECOGNIZED
        chan_id = payload[0]

        flat = _numeric_row(payload[1:])
        if flat is not None:
            return DataFrame(FrameShape.UPDATE, chan_id, (flat,))

        if len(payload) > 3:
            tick = _numeric_row(payload[3:])
            if tick is None:
                return _UNRECOGNIZED
            return DataFrame(FrameShape.COMPACT_TUPLE, chan_id, (tick,))

        body = payload[1]
        if not isinstance(body, list):
            return _UNRECOGNIZED

        if all(isinstance(item, list) for item in body):
            rows = [_numeric_row(item) for item in body]
            if any(row is None for row in rows):
                return _UNRECOGNIZED
            return DataFrame(FrameShape.SNAPSHOT, chan_id, tuple(rows))

        single = _numeric_row(body)
        if single is not None and single:
            return DataFrame(FrameShape.UPDATE, chan_id, (single,))
        return _UNRECOGNIZED


class PublicMessageRouter:
    """
    Routage des messages WS publics vers les sinks liés à chaque chanId.

    La livraison appelle sink.put() de façon bloquante : un consommateur
    lent ralentit la boucle de lecture de toute la connexion.
    """

    def __init__(self, registry: SubscriptionRegistry, logger) -> None:
        self.registry = registry
        self.logger = logger

    def route(self, raw_message: str) -> Optional[DataFrame]:
        """
        Traite une trame brute.

        Returns:
            La trame livrée, ou None si c'était un message de contrôle
            ou si elle a été ignorée
        """
        if EVENT_KEYWORD in raw_message:
            self._handle_event(raw_message)
            return None
        return self._handle_data(raw_message)

    def _handle_event(self, raw_message: str) -> None:
        payload = _loads(raw_message)
        if not isinstance(payload, dict):
            self.logger.debug(f"Message de contrôle illisible ignoré: {raw_message[:100]}")
            return

        event_name = payload.get("event")
        if event_name == EVENT_SUBSCRIBED:
            event = SubscribeMessage.from_dict(payload)
            binding = self.registry.bind(event)
            if binding:
                self.logger.info(
                    f"✅ Souscription confirmée {event.channel}/{event.pair} → chanId={binding.chan_id} "
                    f"({len(binding.sinks)} sink(s))"
                )
            else:
                self.logger.warning(
                    f"⚠️ Confirmation sans souscription en attente: "
                    f"{event.channel}/{event.pair} chanId={event.chan_id}"
                )
        elif event_name == EVENT_ERROR:
            self.logger.warning(
                f"⚠️ Erreur exchange: code={payload.get('code')} msg=\"{payload.get('msg', '')}\""
            )
        elif event_name == EVENT_INFO:
            self.logger.info(f"ℹ️ Info exchange: version={payload.get('version')}")
        else:
            self.logger.debug(f"Événement ignoré: {event_name}")

    def _handle_data(self, raw_message: str) -> Optional[DataFrame]:
        frame = PublicMessageParser.classify_data(_loads(raw_message))
        if frame.shape is FrameShape.UNRECOGNIZED:
            self.logger.debug(f"Trame non reconnue ignorée: {raw_message[:100]}")
            return None

        binding = self.registry.lookup(frame.chan_id)
        if binding is None:
            self.logger.warning(f"⚠️ chanId inconnu {frame.chan_id}, trame ignorée")
            return None

        for sink in binding.sinks:
            sink.put(frame.delivery_rows())
        return frame
