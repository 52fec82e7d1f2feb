#!/usr/bin/env python3
"""
Package des interfaces pour le client WebSocket Bitfinex.

Ce package contient les contrats des composants principaux, permettant
une meilleure testabilité et une architecture plus flexible.
"""

from .transport_interface import TransportInterface
from .websocket_manager_interface import WebSocketServiceInterface

__all__ = [
    "TransportInterface",
    "WebSocketServiceInterface",
]
