"""Geometry index — zone polygons and point-in-zone containment.

Zones are kept in a fixed, deterministic order. Forbidden zones (kind in the
suspicious-kind set) are iterated in the configured ``zone_order`` first and
then in geography file order; this order decides which zone "wins" when a
ping lies inside several overlapping forbidden zones.

Containment strategy:
  1. Axis-aligned bounding-box pre-filter on the zone's cached bounds.
  2. Exact planar test on the prepared shapely geometry (outer rings minus
     holes, any part of a MultiPolygon). Boundary points count as inside.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from shapely.geometry import Point

from oceanwatch.errors import UnknownZoneError
from oceanwatch.models.zone import Zone

logger = logging.getLogger(__name__)

# (lon, lat), GeoJSON axis order
Coordinate = tuple[float, float]


def contains(zone: Zone, point: Coordinate) -> bool:
    """True if *point* lies inside *zone* (and outside all of its holes)."""
    lon, lat = point
    if not zone.bbox_contains(lon, lat):
        return False
    return zone.prepared.covers(Point(lon, lat))


class GeometryIndex:
    """Zones keyed by name with a configurable forbidden-kind set."""

    def __init__(
        self,
        zones: Iterable[Zone],
        suspicious_kinds: Iterable[str],
        zone_order: Sequence[str] = (),
    ):
        self._zones: list[Zone] = list(zones)
        self.suspicious_kinds = frozenset(suspicious_kinds)
        self._by_name: dict[str, Zone] = {}
        for zone in self._zones:
            if zone.name in self._by_name:
                logger.warning("Duplicate zone name %r; lookups by name use the first occurrence", zone.name)
                continue
            self._by_name[zone.name] = zone
        self._forbidden = self._order_forbidden(zone_order)
        logger.debug(
            "Geometry index: %d zones, %d forbidden (kinds=%s)",
            len(self._zones), len(self._forbidden), sorted(self.suspicious_kinds),
        )

    def _order_forbidden(self, zone_order: Sequence[str]) -> list[Zone]:
        forbidden = [z for z in self._zones if self.is_forbidden(z)]
        rank = {name: i for i, name in enumerate(zone_order)}
        # sorted() is stable: unlisted zones keep file order after listed ones
        return sorted(forbidden, key=lambda z: rank.get(z.name, len(rank)))

    # ── Lookups ───────────────────────────────────────────────────────────────

    @property
    def zones(self) -> list[Zone]:
        return list(self._zones)

    def zone(self, name: str) -> Optional[Zone]:
        return self._by_name.get(name)

    def is_forbidden(self, zone: Zone) -> bool:
        return zone.kind is not None and zone.kind in self.suspicious_kinds

    def forbidden_zones(self) -> list[Zone]:
        """Forbidden zones in first-match iteration order."""
        return list(self._forbidden)

    def forbidden_zone(self, name: str) -> Zone:
        zone = self._by_name.get(name)
        if zone is None or not self.is_forbidden(zone):
            raise UnknownZoneError(f"{name!r} is not a forbidden zone")
        return zone

    def kinds(self) -> list[str]:
        """Distinct zone kinds present, in first-seen order."""
        seen: dict[str, None] = {}
        for zone in self._zones:
            if zone.kind:
                seen.setdefault(zone.kind, None)
        return list(seen)

    # ── Containment ───────────────────────────────────────────────────────────

    def contains(self, zone: Zone, point: Coordinate) -> bool:
        return contains(zone, point)

    def first_forbidden_match(self, point: Coordinate) -> Optional[Zone]:
        """The first forbidden zone containing *point*, or None.

        Overlapping forbidden zones are NOT all reported: the ping is
        attributed to the earliest zone in iteration order only.
        """
        for zone in self._forbidden:
            if contains(zone, point):
                return zone
        return None

    def forbidden_matches(self, point: Coordinate) -> list[Zone]:
        """Every forbidden zone containing *point*, in iteration order."""
        return [z for z in self._forbidden if contains(z, point)]
