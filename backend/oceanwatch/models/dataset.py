"""Immutable in-memory dataset holding everything the engine queries.

Built once by the dataset loader and never mutated afterwards; every query
recomputes from it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from oceanwatch.models.event import CargoReport, PingEvent, TransactionEvent
from oceanwatch.models.location import LocationNode
from oceanwatch.models.vessel import Vessel
from oceanwatch.models.zone import Zone


@dataclass(frozen=True)
class Dataset:
    vessels: tuple[Vessel, ...] = ()
    pings: tuple[PingEvent, ...] = ()
    transactions: tuple[TransactionEvent, ...] = ()
    cargo_reports: dict[str, CargoReport] = field(default_factory=dict)
    location_nodes: dict[str, LocationNode] = field(default_factory=dict)
    # Point feature name -> (lon, lat); first feature with a given name wins
    place_points: dict[str, tuple[float, float]] = field(default_factory=dict)
    zones: tuple[Zone, ...] = ()
    pings_by_vessel: dict[str, tuple[PingEvent, ...]] = field(init=False, repr=False)
    vessels_by_id: dict[str, Vessel] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        grouped: dict[str, list[PingEvent]] = {}
        for ping in self.pings:
            grouped.setdefault(ping.target, []).append(ping)
        object.__setattr__(self, "pings_by_vessel", {k: tuple(v) for k, v in grouped.items()})
        object.__setattr__(self, "vessels_by_id", {v.vessel_id: v for v in self.vessels})

    def pings_for(self, vessel: Vessel) -> tuple[PingEvent, ...]:
        return self.pings_by_vessel.get(vessel.vessel_id, ())

    def vessel(self, vessel_id: str) -> Optional[Vessel]:
        return self.vessels_by_id.get(vessel_id)

    def vessels_of(self, company: str) -> list[Vessel]:
        return [v for v in self.vessels if v.company == company]
