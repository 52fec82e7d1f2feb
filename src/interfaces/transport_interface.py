#!/usr/bin/env python3
"""
Interface pour le transport WebSocket - Contrat consommé par les boucles de lecture.

Les clients public et privé n'utilisent que trois opérations : envoyer
une trame texte, recevoir la trame suivante (bloquant) et fermer.
"""

from abc import ABC, abstractmethod


class TransportInterface(ABC):
    """
    Interface pour un flux bidirectionnel de messages texte déjà ouvert.

    Permet de remplacer la connexion réelle par un transport scripté
    dans les tests.
    """

    @abstractmethod
    def send(self, message: str) -> None:
        """
        Envoie une trame texte.

        Raises:
            WebSocketConnectionError: En cas d'échec d'écriture
        """
        pass

    @abstractmethod
    def recv(self) -> str:
        """
        Bloque jusqu'à la réception de la trame texte suivante.

        Raises:
            WebSocketConnectionError: Si le transport est fermé ou en erreur
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Ferme le transport (débloque un recv() en cours)."""
        pass
