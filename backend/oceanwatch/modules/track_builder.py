"""Track builder: splits a vessel's transponder pings into track segments.

A gap is a time delta between consecutive *retained* pings (pings whose
location resolved) that exceeds GAP_THRESHOLD_HOURS. A gap closes the current
segment, is recorded as a GapEvent, and the new ping starts the next segment;
segments are never merged across a gap.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from oceanwatch.config import settings
from oceanwatch.models.event import PingEvent
from oceanwatch.models.vessel import Vessel
from oceanwatch.modules.filter_context import DateRange
from oceanwatch.modules.location_resolver import LocationResolver
from oceanwatch.utils.geo import point_distance_nm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackPoint:
    lon: float
    lat: float
    timestamp: datetime
    location_id: str

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.lon, self.lat)


@dataclass
class TrackSegment:
    points: list[TrackPoint] = field(default_factory=list)

    @property
    def coordinates(self) -> list[tuple[float, float]]:
        return [p.coordinates for p in self.points]

    @property
    def drawable(self) -> bool:
        """Single-point segments carry no polyline."""
        return len(self.points) >= 2


@dataclass(frozen=True)
class GapEvent:
    start: TrackPoint
    end: TrackPoint
    hours: float

    @property
    def distance_nm(self) -> float:
        return point_distance_nm(self.start.coordinates, self.end.coordinates)


@dataclass
class VesselTrack:
    vessel: Vessel
    segments: list[TrackSegment] = field(default_factory=list)
    gaps: list[GapEvent] = field(default_factory=list)

    @property
    def points(self) -> list[TrackPoint]:
        return [p for seg in self.segments for p in seg.points]


def select_pings(
    pings: Iterable[PingEvent],
    date_range: Optional[DateRange] = None,
    ping_type: Optional[str] = None,
) -> list[PingEvent]:
    """Transponder pings inside the inclusive range, sorted by time.

    Pings with an unparseable timestamp cannot be ordered and are excluded.
    """
    ping_type = ping_type or settings.PING_EVENT_TYPE
    selected = [
        p for p in pings
        if p.event_type == ping_type
        and p.timestamp is not None
        and (date_range is None or date_range.contains(p.timestamp))
    ]
    # Stable: pings sharing a timestamp keep input order
    selected.sort(key=lambda p: p.timestamp)
    return selected


def build_track(
    vessel: Vessel,
    pings: Iterable[PingEvent],
    resolver: LocationResolver,
    date_range: Optional[DateRange] = None,
    gap_threshold_hours: Optional[float] = None,
    ping_type: Optional[str] = None,
) -> VesselTrack:
    """Build the segmented track for one vessel.

    Returns a VesselTrack whose segments partition the resolvable pings in
    time order and whose gaps list every interval above the threshold.
    The final segment is always emitted, even with a single point.
    """
    threshold = settings.GAP_THRESHOLD_HOURS if gap_threshold_hours is None else gap_threshold_hours
    track = VesselTrack(vessel=vessel)
    current: list[TrackPoint] = []
    previous: Optional[TrackPoint] = None

    for ping in select_pings(pings, date_range, ping_type):
        coords = resolver.resolve_ping(ping)
        if coords is None:
            continue
        point = TrackPoint(lon=coords[0], lat=coords[1], timestamp=ping.timestamp, location_id=ping.source)

        if previous is not None:
            hours = (point.timestamp - previous.timestamp).total_seconds() / 3600.0
            if hours > threshold:
                track.segments.append(TrackSegment(current))
                track.gaps.append(GapEvent(start=previous, end=point, hours=hours))
                current = []
        current.append(point)
        previous = point

    if current:
        track.segments.append(TrackSegment(current))

    if track.gaps:
        logger.debug(
            "Vessel %s: %d segments, %d gaps (threshold %.1fh)",
            vessel.vessel_id, len(track.segments), len(track.gaps), threshold,
        )
    return track
