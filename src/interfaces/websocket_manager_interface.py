#!/usr/bin/env python3
"""
Interface pour WebSocketService - Contrat de la façade des deux pipelines.
"""

import concurrent.futures
from abc import ABC, abstractmethod
from typing import Any


class WebSocketServiceInterface(ABC):
    """
    Interface pour la façade WebSocket (pipeline public + pipeline privé).

    Permet de facilement créer des mocks pour les tests de l'application.
    """

    @abstractmethod
    def start_public(self) -> concurrent.futures.Future:
        """
        Démarre la boucle de lecture publique dans un thread.

        Returns:
            Future portant l'erreur terminale de la connexion
        """
        pass

    @abstractmethod
    def start_private(self, sink: Any) -> concurrent.futures.Future:
        """
        Démarre la boucle de lecture privée dans un thread.

        Args:
            sink: Destination des TermData
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Ferme les transports et arrête les threads de lecture."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        pass
