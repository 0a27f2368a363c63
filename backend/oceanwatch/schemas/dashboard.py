"""Pydantic schema bundling every view for one filter version."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from oceanwatch.schemas.network import NetworkRead
from oceanwatch.schemas.suspicion import CompanyCount, CompanyDetailsRead, SuspicionAggregateRead
from oceanwatch.schemas.timeline import TimelineRead
from oceanwatch.schemas.track import TrackRead


class FilterRead(BaseModel):
    company: str
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None


class DashboardRead(BaseModel):
    version: int
    filter: FilterRead
    top_n: int
    ranked_companies: list[CompanyCount]
    companies_to_display: list[str]
    suspicion: SuspicionAggregateRead
    tracks: list[TrackRead]
    network: NetworkRead
    timeline: TimelineRead
    details: Optional[CompanyDetailsRead] = None
