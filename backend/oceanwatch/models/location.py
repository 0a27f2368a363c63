"""Location node: a named place a transponder ping originates from."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class LocationNode:
    location_id: str
    name: Optional[str] = None

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "LocationNode":
        return cls(location_id=str(node["id"]), name=node.get("Name"))
