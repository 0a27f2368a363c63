"""Pydantic schemas for the company→zone suspicion network."""
from __future__ import annotations

from pydantic import BaseModel


class NetworkNodeRead(BaseModel):
    id: str
    type: str
    pings: int
    is_baseline: bool = False


class NetworkLinkRead(BaseModel):
    source: str
    target: str
    value: int


class NetworkRead(BaseModel):
    nodes: list[NetworkNodeRead]
    links: list[NetworkLinkRead]
