"""Pydantic schemas for daily timeline series."""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class TimelinePointRead(BaseModel):
    day: date
    value: float


class TimelineRead(BaseModel):
    title: str
    metric: str
    points: list[TimelinePointRead]
    # Active date filter, for highlighting only; the series itself is unfiltered
    range_start: Optional[datetime] = None
    range_end: Optional[datetime] = None
