"""Zone entity: a classified Polygon / MultiPolygon from the geography payload."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry
from shapely.prepared import PreparedGeometry, prep

POLYGON_TYPES = ("Polygon", "MultiPolygon")

# Label for forbidden zones whose feature carries no Name
UNNAMED_ZONE = "Forbidden Zone"


@dataclass(frozen=True, eq=False)
class Zone:
    name: str
    kind: Optional[str]
    geometry: BaseGeometry
    # (min_lon, min_lat, max_lon, max_lat)
    bounds: tuple[float, float, float, float] = field(init=False)
    prepared: PreparedGeometry = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bounds", tuple(self.geometry.bounds))
        object.__setattr__(self, "prepared", prep(self.geometry))

    @classmethod
    def from_feature(cls, feature: dict[str, Any]) -> Optional["Zone"]:
        """Build a zone from a GeoJSON feature; None for non-polygon features."""
        geometry = feature.get("geometry") or {}
        if geometry.get("type") not in POLYGON_TYPES:
            return None
        props = feature.get("properties") or {}
        return cls(
            name=props.get("Name") or UNNAMED_ZONE,
            kind=props.get("*Kind"),
            geometry=shape(geometry),
        )

    def bbox_contains(self, lon: float, lat: float) -> bool:
        min_lon, min_lat, max_lon, max_lat = self.bounds
        return min_lon <= lon <= max_lon and min_lat <= lat <= max_lat
