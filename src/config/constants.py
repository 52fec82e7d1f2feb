#!/usr/bin/env python3
"""
Constantes du protocole WebSocket Bitfinex (API v1).

Ce module contient les noms de canaux, les paires connues et les
marqueurs utilisés par le classifieur de messages.
"""

# ============================================================================
# PAIRES DE TRADING
# ============================================================================
BTCUSD = "BTCUSD"
LTCUSD = "LTCUSD"
LTCBTC = "LTCBTC"
ETHUSD = "ETHUSD"
ETHBTC = "ETHBTC"
ETCUSD = "ETCUSD"
ETCBTC = "ETCBTC"
BFXUSD = "BFXUSD"
BFXBTC = "BFXBTC"
ZECUSD = "ZECUSD"
ZECBTC = "ZECBTC"
XMRUSD = "XMRUSD"
XMRBTC = "XMRBTC"
RRTUSD = "RRTUSD"
RRTBTC = "RRTBTC"

KNOWN_PAIRS = (
    BTCUSD, LTCUSD, LTCBTC, ETHUSD, ETHBTC, ETCUSD, ETCBTC,
    BFXUSD, BFXBTC, ZECUSD, ZECBTC, XMRUSD, XMRBTC, RRTUSD, RRTBTC,
)

# ============================================================================
# CANAUX PUBLICS
# ============================================================================
CHAN_BOOK = "book"
CHAN_TRADE = "trades"
CHAN_TICKER = "ticker"

# ============================================================================
# MARQUEURS DU PROTOCOLE
# ============================================================================
EVENT_KEYWORD = "event"  # Présent dans tout message de contrôle
EVENT_SUBSCRIBE = "subscribe"
EVENT_SUBSCRIBED = "subscribed"
EVENT_AUTH = "auth"
EVENT_ERROR = "error"
EVENT_INFO = "info"
AUTH_STATUS_OK = "OK"
AUTH_PAYLOAD_PREFIX = "AUTH"

# Ligne sentinelle préfixée à chaque snapshot ("remplacer l'état local")
SNAPSHOT_SENTINEL = (0.0, 0.0, 0.0)

# Sous-protocoles annoncés lors du handshake
WS_SUBPROTOCOLS = ("p1", "p2")

# ============================================================================
# VALEURS PAR DÉFAUT
# ============================================================================
DEFAULT_BOOK_LENGTH = 25  # Profondeur du carnet demandée par défaut
DEFAULT_SINK_MAXSIZE = 0  # 0 = file illimitée
DEFAULT_MAX_WORKERS = 2  # Une boucle publique + une boucle privée
