#!/usr/bin/env python3
"""
Sous-package WebSocket privé (Bitfinex v1).

Composants:
- auth.py: AuthManager (signature HMAC + message d'auth)
- router.py: PrivateMessageRouter (réponses d'auth et enregistrements par term)
- models.py: TermData, AuthResponse, PrivateState
"""

__all__ = [
    "auth",
    "router",
    "models",
]
