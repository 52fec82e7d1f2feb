#!/usr/bin/env python3
import json
from typing import Any, Callable, List, Optional

from .models import AuthResponse, TermData


class PrivateMessageRouter:
    """Routage des messages privés : réponses d'événement et enregistrements par term."""

    def __init__(self, on_record: Optional[Callable[[TermData], None]] = None, logger=None):
        self.on_record = on_record
        self.logger = logger

    @staticmethod
    def parse_event(payload: Any) -> Optional[AuthResponse]:
        """Tout objet JSON est une réponse d'événement (auth, info...)."""
        if not isinstance(payload, dict):
            return None
        return AuthResponse(
            event=str(payload.get("event", "")),
            status=str(payload.get("status", "")),
            chan_id=payload.get("chanId"),
            user_id=payload.get("userId"),
        )

    @staticmethod
    def parse_terms(payload: Any) -> List[TermData]:
        """
        [0, term, payload] → un TermData par sous-liste si payload est une
        liste de listes, un seul TermData si payload est une liste plate.
        """
        if not isinstance(payload, list) or len(payload) < 3:
            return []
        term, body = payload[1], payload[2]
        if not isinstance(term, str) or not isinstance(body, list) or not body:
            return []

        if isinstance(body[0], list):
            return [TermData(term=term, data=list(item)) for item in body if isinstance(item, list)]
        return [TermData(term=term, data=list(body))]

    def route(self, raw_message: str, streaming: bool = True) -> Optional[AuthResponse]:
        """
        Décode une trame privée.

        Returns:
            La réponse d'événement à traiter par l'appelant, ou None si la
            trame était une donnée (émise via on_record) ou a été ignorée
        """
        try:
            payload = json.loads(raw_message)
        except json.JSONDecodeError:
            if self.logger:
                self.logger.debug(f"Message brut reçu: {raw_message[:100]}...")
            return None

        event = self.parse_event(payload)
        if event is not None:
            return event

        if not streaming:
            if self.logger:
                self.logger.debug("Donnée privée reçue avant l'authentification, ignorée")
            return None

        records = self.parse_terms(payload)
        if not records:
            if self.logger:
                self.logger.debug(f"Trame privée ignorée: {raw_message[:100]}")
            return None

        if callable(self.on_record):
            for record in records:
                self.on_record(record)
        return None
