#!/usr/bin/env python3
"""WebSocket privée Bitfinex - Runner affichant les enregistrements par term."""

import queue
import signal
import sys
import threading

from config import get_settings
from exceptions import ConfigurationError
from logging_setup import setup_logging
from ws_private import create_private_ws_client


class PrivateWSRunner:
    """Runner WebSocket privée, basé sur PrivateWSClient."""

    def __init__(self):
        settings = get_settings()
        self.logger = setup_logging(settings["log_level"])
        self.records: queue.Queue = queue.Queue(maxsize=settings["sink_maxsize"])
        self.client = create_private_ws_client(settings, self.logger)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Gestionnaire de signal pour Ctrl+C."""
        self.logger.info("🧹 Arrêt demandé par l'utilisateur (Ctrl+C)")
        self.client.close()

    def run(self) -> int:
        self.logger.info("🚀 Démarrage WebSocket privée (runner)")
        reader = threading.Thread(
            target=self.client.connect_private, args=(self.records,), daemon=True, name="ws_private"
        )
        reader.start()

        while reader.is_alive() or not self.records.empty():
            try:
                record = self.records.get(timeout=0.5)
            except queue.Empty:
                continue
            if record.has_error():
                self.logger.error(f"⛔ {record.error}")
                return 1
            self.logger.info(f"📬 {record.term}: {record.data}")
        return 0


def main() -> int:
    try:
        runner = PrivateWSRunner()
    except ConfigurationError as e:
        print(f"⛔ {e}", file=sys.stderr)
        return 1
    return runner.run()


if __name__ == "__main__":
    sys.exit(main())
