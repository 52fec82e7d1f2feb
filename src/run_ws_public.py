#!/usr/bin/env python3
"""Script de démonstration : carnet d'ordres, trades et ticker Bitfinex en temps réel."""

import argparse
import queue
import signal
import sys
import threading

from config import CHAN_BOOK, CHAN_TICKER, CHAN_TRADE, KNOWN_PAIRS, SNAPSHOT_SENTINEL, get_settings
from exceptions import WebSocketConnectionError
from logging_setup import setup_logging
from ws.manager import WebSocketService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Flux public Bitfinex (book + trades, ticker en option)")
    parser.add_argument("--pair", default="BTCUSD", help=f"Paire à suivre (défaut: BTCUSD, connues: {', '.join(KNOWN_PAIRS)})")
    parser.add_argument("--length", type=int, default=None, help="Profondeur du carnet")
    parser.add_argument("--ticker", action="store_true", help="Suivre aussi le canal ticker")
    return parser.parse_args(argv)


def consume(name: str, sink: queue.Queue, logger, stop_event: threading.Event):
    """Affiche les lignes reçues ; une ligne [0, 0, 0] annonce un snapshot."""
    while not stop_event.is_set():
        try:
            rows = sink.get(timeout=0.5)
        except queue.Empty:
            continue
        if rows and rows[0] == list(SNAPSHOT_SENTINEL):
            logger.info(f"📸 {name} snapshot : {len(rows) - 1} ligne(s)")
        else:
            logger.info(f"📈 {name} update : {rows}")


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    logger = setup_logging(settings["log_level"])
    logger.info("🚀 Lancement du flux WebSocket (public)")

    service = WebSocketService.from_settings(settings, logger=logger)
    book, trades = service.new_sink(), service.new_sink()
    length = args.length or settings["book_length"]
    service.add_subscribe(CHAN_BOOK, args.pair, length, book)
    service.add_subscribe(CHAN_TRADE, args.pair, length, trades)
    sinks = [("book", book), ("trades", trades)]
    if args.ticker:
        ticker = service.new_sink()
        service.add_subscribe(CHAN_TICKER, args.pair, length, ticker)
        sinks.append(("ticker", ticker))

    stop_event = threading.Event()

    def signal_handler(signum, frame):
        logger.info("🧹 Arrêt demandé, fermeture…")
        stop_event.set()
        service.stop()

    signal.signal(signal.SIGINT, signal_handler)

    for name, sink in sinks:
        threading.Thread(
            target=consume, args=(name, sink, logger, stop_event), daemon=True, name=f"consume_{name}"
        ).start()

    future = service.start_public()
    try:
        future.result()
    except WebSocketConnectionError as e:
        logger.error(f"Connexion publique perdue: {e}")
        return 1
    finally:
        stop_event.set()
        service.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
