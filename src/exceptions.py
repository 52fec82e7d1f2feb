#!/usr/bin/env python3
"""
Exceptions personnalisées pour le client WebSocket Bitfinex.

Ce module définit les exceptions spécifiques utilisées par les deux
pipelines (public et privé) pour une meilleure gestion d'erreurs.
"""


class BitfinexWSException(Exception):
    """Exception de base pour toutes les erreurs du client."""
    pass


class WebSocketConnectionError(BitfinexWSException):
    """Erreur de transport WebSocket (connexion, lecture ou écriture)."""
    pass


class AuthenticationError(BitfinexWSException):
    """Authentification refusée par l'exchange sur la WebSocket privée."""
    pass



class ConfigurationError(BitfinexWSException):
    """Configuration incomplète (credentials absents, URL invalide...)."""
    pass
