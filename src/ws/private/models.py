#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


@dataclass(frozen=True)
class TermData:
    """
    Enregistrement du canal privé.

    Term: code court du type de donnée (ps, ws, os, on, ou, oc, te, tu...).
    Data: nombre d'éléments variable selon le term, par exemple
        Term: ws, Data: ["exchange", "BTC", 0.01410829, 0]
        Term: oc, Data: [0, "BTCUSD", 0, -0.01, "", "CANCELED", 270, 0, "2015-10-15T11:26:13Z", 0]
    Error: renseigné seul lorsque la connexion se termine en erreur.
    """
    term: str = ""
    data: List[Any] = field(default_factory=list)
    error: str = ""

    def has_error(self) -> bool:
        return len(self.error) > 0


@dataclass(frozen=True)
class AuthResponse:
    event: str
    status: str = ""
    chan_id: Optional[float] = None
    user_id: Optional[float] = None

    @property
    def is_auth(self) -> bool:
        return self.event == "auth"

    @property
    def is_ok(self) -> bool:
        return self.status == "OK"


class PrivateState(Enum):
    CONNECTING = "connecting"
    AUTHENTICATING = "authenticating"
    STREAMING = "streaming"
    CLOSED = "closed"
