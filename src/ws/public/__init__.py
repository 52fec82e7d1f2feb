#!/usr/bin/env python3
"""
Sous-package WebSocket public (Bitfinex v1).

Contient des composants modulaires pour le client WebSocket public:
- subscriptions.py: Registre des souscriptions et messages subscribe
- parser_router.py: Classification des trames et routage par chanId
- models.py: Dataclasses pour les données structurées
"""

__all__ = [
    "subscriptions",
    "parser_router",
    "models",
]
