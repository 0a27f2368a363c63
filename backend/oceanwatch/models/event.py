"""Graph link events: transponder pings and cargo transactions."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from oceanwatch.utils.parsing import parse_day, parse_timestamp, to_quantity


@dataclass(frozen=True)
class PingEvent:
    """A timestamped link from a location (source) to a vessel (target).

    ``timestamp`` is None when the raw ``time`` field failed to parse; such
    pings are excluded from every time-based computation.
    """
    source: str
    target: str
    timestamp: Optional[datetime]
    event_type: str

    @classmethod
    def from_link(cls, link: dict[str, Any]) -> "PingEvent":
        return cls(
            source=str(link.get("source")),
            target=str(link.get("target")),
            timestamp=parse_timestamp(link.get("time")),
            event_type=link.get("type", ""),
        )


@dataclass(frozen=True)
class TransactionEvent:
    source: str
    target: str
    day: Optional[date]

    @classmethod
    def from_link(cls, link: dict[str, Any]) -> "TransactionEvent":
        return cls(
            source=str(link.get("source")),
            target=str(link.get("target")),
            day=parse_day(link.get("date")),
        )


@dataclass(frozen=True)
class CargoReport:
    document_id: str
    qty_tons: float = 0.0

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "CargoReport":
        return cls(document_id=str(node["id"]), qty_tons=to_quantity(node.get("qty_tons")))
