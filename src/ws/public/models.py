#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from config.constants import SNAPSHOT_SENTINEL

Row = List[float]


@dataclass(frozen=True)
class SubscriptionRequest:
    """Souscription en attente : (canal, paire, profondeur) + sink de livraison."""
    channel: str
    pair: str
    length: int
    sink: Any = field(compare=False, repr=False)

    @property
    def topic(self) -> Tuple[str, str]:
        return self.channel, self.pair


@dataclass
class ChannelBinding:
    """Lien chanId → sinks, créé à la confirmation "subscribed"."""
    chan_id: float
    channel: str
    pair: str
    sinks: List[Any] = field(default_factory=list, repr=False)


@dataclass(frozen=True)
class SubscribeMessage:
    """Message de contrôle subscribe/subscribed (format JSON du protocole)."""
    event: str
    channel: str
    pair: str
    length: str = ""
    chan_id: Optional[float] = None

    def to_dict(self) -> dict:
        payload = {
            "event": self.event,
            "channel": self.channel,
            "pair": self.pair,
            "len": self.length,
        }
        if self.chan_id is not None:
            payload["chanId"] = self.chan_id
        return payload

    @classmethod
    def from_dict(cls, payload: dict) -> "SubscribeMessage":
        chan_id = payload.get("chanId")
        return cls(
            event=str(payload.get("event", "")),
            channel=str(payload.get("channel", "")),
            pair=str(payload.get("pair", "")),
            length=str(payload.get("len", "")),
            chan_id=chan_id if _is_number(chan_id) else None,
        )


class FrameShape(Enum):
    UPDATE = "update"
    COMPACT_TUPLE = "compact_tuple"
    SNAPSHOT = "snapshot"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class DataFrame:
    """Résultat de la classification d'une trame de données publique."""
    shape: FrameShape
    chan_id: Optional[float] = None
    rows: Tuple[Tuple[float, ...], ...] = ()

    @property
    def is_snapshot(self) -> bool:
        return self.shape is FrameShape.SNAPSHOT

    def delivery_rows(self) -> List[Row]:
        """Lignes à livrer ; un snapshot commence par la ligne sentinelle."""
        rows = [list(row) for row in self.rows]
        if self.is_snapshot:
            rows.insert(0, list(SNAPSHOT_SENTINEL))
        return rows


def _is_number(value: Any) -> bool:
    # bool est une sous-classe d'int en Python
    return isinstance(value, (int, float)) and not isinstance(value, bool)
