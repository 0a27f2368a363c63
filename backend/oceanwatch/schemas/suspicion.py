"""Pydantic schemas for suspicion aggregates."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CompanyCount(BaseModel):
    name: str
    count: int


class FlowRead(BaseModel):
    company: str
    zone: str
    count: int


class SuspicionRecordRead(BaseModel):
    vessel_id: str
    vessel_name: Optional[str] = None
    company: Optional[str] = None
    zone: str
    zones: list[str]
    timestamp: Optional[datetime] = None
    lon: float
    lat: float


class SuspicionAggregateRead(BaseModel):
    company_totals: list[CompanyCount]
    zone_totals: dict[str, int]
    flows: list[FlowRead]
    records: list[SuspicionRecordRead]
    total: int


class CompanyDetailsRead(BaseModel):
    company: str
    vessel_count: int
    suspicious_pings: list[SuspicionRecordRead]
