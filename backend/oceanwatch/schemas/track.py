"""Pydantic schemas for vessel tracks and transponder gaps."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from oceanwatch.schemas.suspicion import SuspicionRecordRead


class GapRead(BaseModel):
    start: tuple[float, float]
    end: tuple[float, float]
    hours: float
    start_utc: datetime
    end_utc: datetime
    distance_nm: float


class TrackRead(BaseModel):
    vessel_id: str
    vessel_name: Optional[str] = None
    company: Optional[str] = None
    category: str
    is_baseline: bool = False
    # (lon, lat) in time order; segments split at gaps
    points: list[tuple[float, float]]
    segments: list[list[tuple[float, float]]]
    gaps: list[GapRead]
    suspicious_pings: list[SuspicionRecordRead] = []
