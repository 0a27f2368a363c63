"""Pydantic schemas for forbidden-zone investigation."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ZoneCompanyPings(BaseModel):
    company: str
    pings: int
    vessels: list[str]


class ZoneInvestigationRead(BaseModel):
    zone: str
    kind: Optional[str] = None
    species: list[str]
    total_pings: int
    companies: list[ZoneCompanyPings]
