"""Query facade — the one entry point external views call.

Every method takes the active FilterContext and recomputes from the immutable
Dataset; nothing is cached between calls, so the same context always yields
the same output. Results are pydantic models (``model_dump()`` for plain
dicts).

Companies to display:
  - scoped filter   → the selected company only
  - unscoped filter → top-N ranked companies, plus the baseline company
                      appended when it ranks outside the top N
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from oceanwatch.config import settings
from oceanwatch.models.base import NetworkNodeTypeEnum, TrackCategoryEnum
from oceanwatch.models.dataset import Dataset
from oceanwatch.models.vessel import Vessel
from oceanwatch.modules import company_directory, timeline
from oceanwatch.modules.dataset_loader import load_dataset
from oceanwatch.modules.filter_context import FilterContext, FilterState
from oceanwatch.modules.geometry_index import GeometryIndex
from oceanwatch.modules.location_resolver import LocationResolver
from oceanwatch.modules.suspicion import (
    SuspicionAggregate,
    SuspicionRecord,
    aggregate,
    suspicious_pings,
    top_companies,
)
from oceanwatch.modules.suspicion_network import build_network
from oceanwatch.modules.track_builder import VesselTrack, build_track
from oceanwatch.modules.zone_investigation import investigate_zone
from oceanwatch.schemas.dashboard import DashboardRead, FilterRead
from oceanwatch.schemas.network import NetworkLinkRead, NetworkNodeRead, NetworkRead
from oceanwatch.schemas.suspicion import (
    CompanyCount,
    CompanyDetailsRead,
    FlowRead,
    SuspicionAggregateRead,
    SuspicionRecordRead,
)
from oceanwatch.schemas.timeline import TimelinePointRead, TimelineRead
from oceanwatch.schemas.track import GapRead, TrackRead
from oceanwatch.schemas.zone import ZoneCompanyPings, ZoneInvestigationRead
from oceanwatch.utils.zone_config import ZoneConfig, get_zone_config

logger = logging.getLogger(__name__)


# ── Schema conversion ─────────────────────────────────────────────────────────

def _record_read(record: SuspicionRecord) -> SuspicionRecordRead:
    return SuspicionRecordRead(
        vessel_id=record.vessel_id,
        vessel_name=record.vessel_name,
        company=record.company,
        zone=record.zone,
        zones=list(record.zones),
        timestamp=record.timestamp,
        lon=record.point[0],
        lat=record.point[1],
    )


def _aggregate_read(agg: SuspicionAggregate) -> SuspicionAggregateRead:
    return SuspicionAggregateRead(
        company_totals=[CompanyCount(name=n, count=c) for n, c in agg.ranked_companies()],
        zone_totals=dict(agg.zone_totals),
        flows=[FlowRead(company=c, zone=z, count=n) for c, z, n in agg.flow_list()],
        records=[_record_read(r) for r in agg.records],
        total=agg.total,
    )


def _filter_read(context: FilterContext) -> FilterRead:
    rng = context.date_range
    return FilterRead(
        company=context.company,
        range_start=rng.start if rng else None,
        range_end=rng.end if rng else None,
    )


class QueryFacade:
    """Read-only query surface over one loaded Dataset."""

    def __init__(
        self,
        dataset: Dataset,
        zone_config: Optional[ZoneConfig] = None,
        baseline_company: Optional[str] = None,
        gap_threshold_hours: Optional[float] = None,
    ):
        self.dataset = dataset
        self.zone_config = zone_config or get_zone_config()
        self.baseline_company = settings.BASELINE_COMPANY if baseline_company is None else baseline_company
        self.gap_threshold_hours = (
            settings.GAP_THRESHOLD_HOURS if gap_threshold_hours is None else gap_threshold_hours
        )
        self.index = GeometryIndex(
            dataset.zones, self.zone_config.suspicious_kinds, self.zone_config.zone_order,
        )
        self.resolver = LocationResolver(dataset)

    @classmethod
    def from_files(
        cls,
        graph_path: Optional[str | Path] = None,
        geography_path: Optional[str | Path] = None,
        location_nodes_path: Optional[str | Path] = None,
        **kwargs,
    ) -> "QueryFacade":
        """Load all payloads (all-or-nothing) and build a facade.

        Raises DatasetLoadError; no facade exists after a failed load.
        """
        dataset = load_dataset(graph_path, geography_path, location_nodes_path)
        return cls(dataset, **kwargs)

    # ── Suspicion ─────────────────────────────────────────────────────────────

    def _aggregate(self, context: FilterContext) -> SuspicionAggregate:
        return aggregate(self.dataset, self.index, context, self.resolver)

    def suspicion(self, context: FilterContext) -> SuspicionAggregateRead:
        """Full suspicion aggregate for the filter."""
        return _aggregate_read(self._aggregate(context))

    def ranked_companies(self, context: FilterContext) -> list[CompanyCount]:
        return [CompanyCount(name=n, count=c) for n, c in self._aggregate(context).ranked_companies()]

    def top_companies(self, context: FilterContext, n: int, pin_baseline: bool = True) -> list[CompanyCount]:
        """Top *n* companies; with ``pin_baseline=False`` a pure top-N cut."""
        ranked = self._aggregate(context).ranked_companies()
        baseline = self.baseline_company if pin_baseline else None
        return [CompanyCount(name=name, count=c) for name, c in top_companies(ranked, n, baseline)]

    def _companies_to_display(self, context: FilterContext, agg: SuspicionAggregate, top_n: int) -> list[str]:
        if context.is_scoped:
            return [context.company]
        ranked = agg.ranked_companies()
        return [name for name, _ in top_companies(ranked, top_n, self.baseline_company)]

    def companies_to_display(self, context: FilterContext, top_n: Optional[int] = None) -> list[str]:
        top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
        return self._companies_to_display(context, self._aggregate(context), top_n)

    # ── Tracks ────────────────────────────────────────────────────────────────

    def vessel_track(self, vessel: Vessel, context: FilterContext) -> VesselTrack:
        return build_track(
            vessel,
            self.dataset.pings_for(vessel),
            self.resolver,
            date_range=context.date_range,
            gap_threshold_hours=self.gap_threshold_hours,
        )

    def _track_read(self, vessel: Vessel, context: FilterContext) -> Optional[TrackRead]:
        track = self.vessel_track(vessel, context)
        if not track.segments:
            return None
        records = suspicious_pings(vessel, self.dataset.pings_for(vessel), self.resolver, self.index, context)
        # Only pings the track contains decide its category
        records = sorted((r for r in records if r.timestamp is not None), key=lambda r: r.timestamp)
        category = TrackCategoryEnum.SUSPICIOUS if records else TrackCategoryEnum.DEFAULT
        return TrackRead(
            vessel_id=vessel.vessel_id,
            vessel_name=vessel.name,
            company=vessel.company,
            category=category.value,
            is_baseline=bool(self.baseline_company) and vessel.company == self.baseline_company,
            points=[p.coordinates for p in track.points],
            segments=[seg.coordinates for seg in track.segments],
            gaps=[
                GapRead(
                    start=g.start.coordinates,
                    end=g.end.coordinates,
                    hours=g.hours,
                    start_utc=g.start.timestamp,
                    end_utc=g.end.timestamp,
                    distance_nm=g.distance_nm,
                )
                for g in track.gaps
            ],
            suspicious_pings=[_record_read(r) for r in records],
        )

    def _tracks(self, context: FilterContext, companies: list[str], include_all_vessels: bool) -> list[TrackRead]:
        if include_all_vessels and not context.is_scoped:
            vessels = list(self.dataset.vessels)
        else:
            shown = set(companies)
            vessels = [v for v in self.dataset.vessels if v.company in shown]
        tracks = []
        for vessel in vessels:
            track = self._track_read(vessel, context)
            if track is not None:
                tracks.append(track)
        return tracks

    def tracks(
        self,
        context: FilterContext,
        top_n: Optional[int] = None,
        include_all_vessels: bool = False,
    ) -> list[TrackRead]:
        """Tracks + gaps for the displayed companies' vessels.

        With an unscoped filter, ``include_all_vessels`` also returns vessels of
        every company and vessels without a company. A scoped filter always
        returns only the selected company's vessels.
        """
        companies = self.companies_to_display(context, top_n)
        return self._tracks(context, companies, include_all_vessels)

    # ── Detail views ──────────────────────────────────────────────────────────

    def company_details(self, context: FilterContext) -> Optional[CompanyDetailsRead]:
        """All suspicious pings of the selected company, oldest first.

        None when the filter is not scoped to a company.
        """
        if not context.is_scoped:
            return None
        vessels = self.dataset.vessels_of(context.company)
        records: list[SuspicionRecord] = []
        for vessel in vessels:
            records.extend(
                suspicious_pings(vessel, self.dataset.pings_for(vessel), self.resolver, self.index, context)
            )
        records.sort(key=lambda r: (r.timestamp is None, r.timestamp))
        return CompanyDetailsRead(
            company=context.company,
            vessel_count=len(vessels),
            suspicious_pings=[_record_read(r) for r in records],
        )

    def zone_investigation(self, zone_name: str, context: FilterContext) -> ZoneInvestigationRead:
        result = investigate_zone(
            self.dataset, self.index, zone_name, context, self.zone_config, self.resolver,
        )
        return ZoneInvestigationRead(
            zone=result.zone,
            kind=result.kind,
            species=result.species,
            total_pings=result.total_pings,
            companies=[
                ZoneCompanyPings(company=c.company, pings=c.pings, vessels=list(c.vessels))
                for c in result.companies
            ],
        )

    def timeline(self, context: FilterContext) -> TimelineRead:
        if context.is_scoped:
            title = f"Suspicious Pings: {context.company}"
            metric = "suspicious_pings"
            series = timeline.suspicious_ping_timeline(self.dataset, self.index, context.company, self.resolver)
        else:
            title = "Total Cargo Over Time (All Companies)"
            metric = "cargo_tons"
            series = timeline.cargo_timeline(self.dataset)
        rng = context.date_range
        return TimelineRead(
            title=title,
            metric=metric,
            points=[TimelinePointRead(day=d, value=v) for d, v in series],
            range_start=rng.start if rng else None,
            range_end=rng.end if rng else None,
        )

    def _network_read(self, agg: SuspicionAggregate, companies: list[str]) -> NetworkRead:
        network = build_network(agg, companies)
        return NetworkRead(
            nodes=[
                NetworkNodeRead(
                    id=n.id,
                    type=n.type.value,
                    pings=n.pings,
                    is_baseline=n.type == NetworkNodeTypeEnum.COMPANY and n.id == self.baseline_company,
                )
                for n in network.nodes
            ],
            links=[NetworkLinkRead(source=link.source, target=link.target, value=link.value) for link in network.links],
        )

    def network(self, context: FilterContext, top_n: Optional[int] = None) -> NetworkRead:
        top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
        agg = self._aggregate(context)
        return self._network_read(agg, self._companies_to_display(context, agg, top_n))

    # ── Company selection ─────────────────────────────────────────────────────

    def company_options(self) -> list[str]:
        return company_directory.company_options(self.dataset.vessels, self.baseline_company)

    def search_company(self, text: str) -> Optional[str]:
        return company_directory.search_company(self.company_options(), text)

    # ── Everything at once ────────────────────────────────────────────────────

    def dashboard(
        self,
        context: FilterContext,
        top_n: Optional[int] = None,
        version: int = 0,
        include_all_vessels: bool = False,
    ) -> DashboardRead:
        """Every view for one filter, computed from a single aggregate pass."""
        top_n = settings.DEFAULT_TOP_N if top_n is None else top_n
        agg = self._aggregate(context)
        companies = self._companies_to_display(context, agg, top_n)
        return DashboardRead(
            version=version,
            filter=_filter_read(context),
            top_n=top_n,
            ranked_companies=[CompanyCount(name=n, count=c) for n, c in agg.ranked_companies()],
            companies_to_display=companies,
            suspicion=_aggregate_read(agg),
            tracks=self._tracks(context, companies, include_all_vessels),
            network=self._network_read(agg, companies),
            timeline=self.timeline(context),
            details=self.company_details(context),
        )

    def refresh(self, state: FilterState, top_n: Optional[int] = None) -> DashboardRead:
        """Recompute for the state's current filter, tagged with its version.

        Callers compare ``result.version`` with ``state.is_current`` to drop
        results that a newer filter change has superseded.
        """
        version = state.version
        return self.dashboard(state.context, top_n=top_n, version=version)
