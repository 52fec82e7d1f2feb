#!/usr/bin/env python3
"""
Package WebSocket pour le client Bitfinex.

Ce package contient les modules spécialisés :
- transport.py : Connexion websocket-client (handshake, TLS, proxy)
- connection_pool.py : ThreadPoolExecutor des boucles de lecture
- manager.py : Façade WebSocketService
- public/ : Souscriptions, classification et routage par chanId
- private/ : Authentification et routage par term
"""
