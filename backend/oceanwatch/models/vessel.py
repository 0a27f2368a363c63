"""Vessel entity with identity and owning company."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Vessel:
    vessel_id: str
    name: Optional[str] = None
    company: Optional[str] = None

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "Vessel":
        company = node.get("company")
        # Empty strings count as "no company" for aggregation purposes
        return cls(
            vessel_id=str(node["id"]),
            name=node.get("name") or None,
            company=company if company else None,
        )

    @property
    def display_name(self) -> str:
        return self.name or self.vessel_id
