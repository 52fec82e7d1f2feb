#!/usr/bin/env python3
import hashlib
import hmac
import time
from typing import Callable, Optional

from config.constants import AUTH_PAYLOAD_PREFIX, EVENT_AUTH


class AuthManager:
    """Signature HMAC-SHA384 et message d'auth de la WebSocket privée."""

    def __init__(
        self,
        api_key: str,
        api_secret: Optional[str] = None,
        signer: Optional[Callable[[str], str]] = None,
    ) -> None:
        if not api_key:
            raise ValueError("🔐 Clé API manquante pour la WebSocket privée (BITFINEX_API_KEY)")
        if signer is None and not api_secret:
            raise ValueError("🔐 Secret API ou fonction de signature requis (BITFINEX_API_SECRET)")
        self.api_key = api_key
        self.api_secret = api_secret
        self._signer = signer or self.sign_payload

    def sign_payload(self, payload: str) -> str:
        return hmac.new(
            self.api_secret.encode("utf-8"),
            payload.encode("utf-8"),
            hashlib.sha384,
        ).hexdigest()

    @staticmethod
    def build_payload(now: Optional[float] = None) -> str:
        timestamp = int(now if now is not None else time.time())
        return f"{AUTH_PAYLOAD_PREFIX}{timestamp}"

    def build_auth_message(self, now: Optional[float] = None) -> tuple[dict, str]:
        """Construit le message d'auth et retourne (message, payload)."""
        payload = self.build_payload(now)
        return {
            "event": EVENT_AUTH,
            "apiKey": self.api_key,
            "authSig": self._signer(payload),
            "authPayload": payload,
        }, payload
