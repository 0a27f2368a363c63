"""Suspicion aggregator — forbidden-zone membership and rolled-up counts.

Each transponder ping of a company-owned vessel is resolved to a point and
tested against the forbidden zones in the geometry index's iteration order.
The FIRST containing zone receives one suspicion unit attributed to
(vessel company, zone) and the remaining zones are not checked for counting:
a ping inside two overlapping preserves is counted once, for the first one.
Suspicion records still list every containing zone for display.

Counts are accumulated per vessel into partial aggregates and combined with
``SuspicionAggregate.merge`` (summing), so per-vessel passes are independent.

Ranking ties: companies with equal totals keep the order in which they were
first seen while scanning vessels in dataset order (stable sort, no
secondary key).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from oceanwatch.config import settings
from oceanwatch.models.dataset import Dataset
from oceanwatch.models.event import PingEvent
from oceanwatch.models.vessel import Vessel
from oceanwatch.modules.filter_context import FilterContext
from oceanwatch.modules.geometry_index import GeometryIndex
from oceanwatch.modules.location_resolver import LocationResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuspicionRecord:
    vessel_id: str
    vessel_name: Optional[str]
    company: Optional[str]
    zones: tuple[str, ...]
    timestamp: Optional[datetime]
    point: tuple[float, float]

    @property
    def zone(self) -> str:
        """All matched zone names, comma-joined."""
        return ", ".join(self.zones)

    @property
    def counted_zone(self) -> str:
        """The zone this ping is counted against (first match)."""
        return self.zones[0]


@dataclass
class SuspicionAggregate:
    # Insertion order is first-seen order; it is the ranking tie-break
    company_totals: dict[str, int] = field(default_factory=dict)
    zone_totals: dict[str, int] = field(default_factory=dict)
    flows: dict[tuple[str, str], int] = field(default_factory=dict)
    records: list[SuspicionRecord] = field(default_factory=list)

    def add(self, company: str, zone: str, n: int = 1) -> None:
        """Count *n* suspicious pings of *company* inside *zone*."""
        self.company_totals[company] = self.company_totals.get(company, 0) + n
        self.zone_totals[zone] = self.zone_totals.get(zone, 0) + n
        self.flows[(company, zone)] = self.flows.get((company, zone), 0) + n

    def merge(self, other: "SuspicionAggregate") -> "SuspicionAggregate":
        """Sum two partial aggregates into a new one.

        Counts are associative and commutative; key order (and so ranking
        tie order) follows ``self`` first, then keys new in ``other``.
        """
        merged = SuspicionAggregate(
            company_totals=dict(self.company_totals),
            zone_totals=dict(self.zone_totals),
            flows=dict(self.flows),
            records=list(self.records),
        )
        for company, n in other.company_totals.items():
            merged.company_totals[company] = merged.company_totals.get(company, 0) + n
        for zone, n in other.zone_totals.items():
            merged.zone_totals[zone] = merged.zone_totals.get(zone, 0) + n
        for key, n in other.flows.items():
            merged.flows[key] = merged.flows.get(key, 0) + n
        merged.records.extend(other.records)
        return merged

    def ranked_companies(self) -> list[tuple[str, int]]:
        """Company totals, descending by count, ties in first-seen order."""
        return sorted(self.company_totals.items(), key=lambda item: -item[1])

    def flow_list(self) -> list[tuple[str, str, int]]:
        return [(company, zone, n) for (company, zone), n in self.flows.items()]

    @property
    def total(self) -> int:
        return sum(self.company_totals.values())

    def is_consistent(self) -> bool:
        """Flow sums match both company totals and zone totals."""
        by_company: dict[str, int] = {}
        by_zone: dict[str, int] = {}
        for (company, zone), n in self.flows.items():
            by_company[company] = by_company.get(company, 0) + n
            by_zone[zone] = by_zone.get(zone, 0) + n
        return by_company == self.company_totals and by_zone == self.zone_totals


def classify_ping(
    ping: PingEvent,
    vessel: Vessel,
    resolver: LocationResolver,
    index: GeometryIndex,
) -> Optional[SuspicionRecord]:
    """Suspicion record for a ping inside at least one forbidden zone, else None."""
    point = resolver.resolve_ping(ping)
    if point is None:
        return None
    matches = index.forbidden_matches(point)
    if not matches:
        return None
    return SuspicionRecord(
        vessel_id=vessel.vessel_id,
        vessel_name=vessel.name,
        company=vessel.company,
        zones=tuple(z.name for z in matches),
        timestamp=ping.timestamp,
        point=point,
    )


def suspicious_pings(
    vessel: Vessel,
    pings: Iterable[PingEvent],
    resolver: LocationResolver,
    index: GeometryIndex,
    context: Optional[FilterContext] = None,
    ping_type: Optional[str] = None,
) -> list[SuspicionRecord]:
    """Suspicion records for one vessel's pings that pass the date filter."""
    ping_type = ping_type or settings.PING_EVENT_TYPE
    context = context or FilterContext()
    records = []
    for ping in pings:
        if ping.event_type != ping_type or not context.includes_time(ping.timestamp):
            continue
        record = classify_ping(ping, vessel, resolver, index)
        if record is not None:
            records.append(record)
    return records


def aggregate_vessel(
    vessel: Vessel,
    pings: Iterable[PingEvent],
    resolver: LocationResolver,
    index: GeometryIndex,
    context: Optional[FilterContext] = None,
    ping_type: Optional[str] = None,
) -> SuspicionAggregate:
    """Partial aggregate for a single vessel. Vessels without a company yield nothing."""
    partial = SuspicionAggregate()
    if not vessel.company:
        return partial
    for record in suspicious_pings(vessel, pings, resolver, index, context, ping_type):
        partial.add(vessel.company, record.counted_zone)
        partial.records.append(record)
    return partial


def candidate_vessels(dataset: Dataset, context: FilterContext) -> list[Vessel]:
    if context.is_scoped:
        return dataset.vessels_of(context.company)
    return list(dataset.vessels)


def aggregate(
    dataset: Dataset,
    index: GeometryIndex,
    context: Optional[FilterContext] = None,
    resolver: Optional[LocationResolver] = None,
) -> SuspicionAggregate:
    """Full suspicion aggregate for the filter, rebuilt from scratch."""
    context = context or FilterContext()
    resolver = resolver or LocationResolver(dataset)
    result = SuspicionAggregate()
    if not index.forbidden_zones():
        return result
    for vessel in candidate_vessels(dataset, context):
        partial = aggregate_vessel(vessel, dataset.pings_for(vessel), resolver, index, context)
        if partial.company_totals:
            result = result.merge(partial)
    logger.debug(
        "Suspicion aggregate (company=%s): %d pings across %d companies",
        context.company, result.total, len(result.company_totals),
    )
    return result


def top_companies(
    ranked: list[tuple[str, int]],
    n: int,
    baseline: Optional[str] = None,
) -> list[tuple[str, int]]:
    """Top *n* ranked companies with the baseline company pinned.

    The baseline is appended after the cut when it ranks outside the top *n*
    and has any count; it never appears twice. For a pure top-N use
    ``ranked[:n]``.
    """
    top = list(ranked[:max(n, 0)])
    if baseline and all(name != baseline for name, _ in top):
        for entry in ranked:
            if entry[0] == baseline:
                top.append(entry)
                break
    return top
