"""Zone investigation: which companies pinged inside one forbidden zone.

Scans every transponder ping in the date range (regardless of the company
selector), keeps those whose resolved point lies inside the zone, and groups
them by the owning company. Unlike the suspicion aggregate, a ping counts for
this zone even when an earlier overlapping zone would win the first match.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from oceanwatch.config import settings
from oceanwatch.models.dataset import Dataset
from oceanwatch.modules.filter_context import FilterContext
from oceanwatch.modules.geometry_index import GeometryIndex, contains
from oceanwatch.modules.location_resolver import LocationResolver
from oceanwatch.utils.zone_config import ZoneConfig

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass
class CompanyZonePings:
    company: str
    pings: int = 0
    vessels: list[str] = field(default_factory=list)


@dataclass
class ZoneInvestigation:
    zone: str
    kind: Optional[str]
    species: list[str]
    companies: list[CompanyZonePings]

    @property
    def total_pings(self) -> int:
        return sum(c.pings for c in self.companies)


def investigate_zone(
    dataset: Dataset,
    index: GeometryIndex,
    zone_name: str,
    context: Optional[FilterContext] = None,
    zone_config: Optional[ZoneConfig] = None,
    resolver: Optional[LocationResolver] = None,
) -> ZoneInvestigation:
    """Pings inside *zone_name*, grouped by company, busiest company first.

    Raises UnknownZoneError if the zone is unknown or not forbidden.
    """
    zone = index.forbidden_zone(zone_name)
    context = context or FilterContext()
    resolver = resolver or LocationResolver(dataset)

    hits: list[tuple[Optional[datetime], str, str]] = []
    for ping in dataset.pings:
        if ping.event_type != settings.PING_EVENT_TYPE or not context.includes_time(ping.timestamp):
            continue
        point = resolver.resolve_ping(ping)
        if point is None or not contains(zone, point):
            continue
        vessel = dataset.vessel(ping.target)
        company = (vessel.company if vessel else None) or UNKNOWN
        vessel_name = (vessel.name if vessel else None) or UNKNOWN
        hits.append((ping.timestamp, company, vessel_name))

    # Chronological; undated pings last
    hits.sort(key=lambda h: (h[0] is None, h[0] or datetime.min))

    groups: dict[str, CompanyZonePings] = {}
    for _, company, vessel_name in hits:
        group = groups.setdefault(company, CompanyZonePings(company))
        group.pings += 1
        if vessel_name not in group.vessels:
            group.vessels.append(vessel_name)

    species = list((zone_config.species if zone_config else {}).get(zone.name, ()))
    companies = sorted(groups.values(), key=lambda g: -g.pings)
    logger.debug("Zone %s: %d pings from %d companies", zone.name, len(hits), len(companies))
    return ZoneInvestigation(zone=zone.name, kind=zone.kind, species=species, companies=companies)
