#!/usr/bin/env python3
"""
Gestionnaire de pool de threads pour les boucles de lecture WebSocket.

Chaque connexion (publique, privée) possède une boucle de lecture bloquante
exécutée dans un thread dédié du pool.
"""

import concurrent.futures
import time
from typing import Callable, List, Optional

from config.constants import DEFAULT_MAX_WORKERS
from config.timeouts import TimeoutConfig
from logging_setup import setup_logging

THREAD_NAME_PREFIX = "ws_reader"


class WebSocketConnectionPool:
    """
    Gestionnaire de pool de connexions WebSocket.

    Responsabilités :
    - Créer et gérer le ThreadPoolExecutor
    - Exécuter les boucles de lecture dans des threads
    - Gérer l'arrêt propre avec timeout
    """

    def __init__(self, logger=None):
        self.logger = logger or setup_logging()
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        self._futures: List[concurrent.futures.Future] = []

    def create_executor(self, max_workers: int = DEFAULT_MAX_WORKERS):
        """Crée le ThreadPoolExecutor s'il n'existe pas déjà."""
        if self._executor is not None:
            self.logger.warning("⚠️ ThreadPoolExecutor déjà créé")
            return

        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=THREAD_NAME_PREFIX,
        )
        self.logger.debug(f"✅ ThreadPoolExecutor créé ({max_workers} workers)")

    def submit(self, reader_loop: Callable, *args, **kwargs) -> concurrent.futures.Future:
        """
        Lance une boucle de lecture dans un thread du pool.

        Returns:
            Future dont l'exception éventuelle est l'échec terminal de la connexion

        Raises:
            RuntimeError: Si le pool n'a pas été créé
        """
        if self._executor is None:
            raise RuntimeError("ThreadPoolExecutor non créé")
        future = self._executor.submit(reader_loop, *args, **kwargs)
        self._futures.append(future)
        return future

    def shutdown_with_timeout(self, timeout: float = TimeoutConfig.THREAD_SHUTDOWN):
        """
        Arrête le pool sans bloquer au-delà de timeout.

        Seules les boucles soumises à ce pool sont attendues. Les transports
        doivent avoir été fermés avant : c'est ce qui débloque les boucles.
        """
        if self._executor is None:
            return

        self._executor.shutdown(wait=False)
        start_time = time.monotonic()
        _, not_done = concurrent.futures.wait(self.active_loops(), timeout=timeout)
        if not_done:
            self.logger.warning(f"⚠️ {len(not_done)} boucle(s) de lecture ne répondent pas, abandonnées")

        self._executor = None
        self._futures = []
        self.logger.debug(f"✅ Pool arrêté en {time.monotonic() - start_time:.2f}s")

    def is_running(self) -> bool:
        return self._executor is not None

    def active_loops(self) -> List[concurrent.futures.Future]:
        """Boucles de ce pool encore en cours d'exécution."""
        return [future for future in self._futures if not future.done()]
