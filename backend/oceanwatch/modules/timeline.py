"""Daily timeline series.

Unscoped: total cargo tonnage per day across all transactions (quantity from
the source cargo document, 0 when missing). Scoped to a company: number of
that company's pings inside any forbidden zone per day.

Both series ignore the active date range; it is returned alongside so a
consumer can highlight it. Records without a parseable date are excluded.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

import polars as pl

from oceanwatch.models.dataset import Dataset
from oceanwatch.modules.geometry_index import GeometryIndex
from oceanwatch.modules.location_resolver import LocationResolver
from oceanwatch.modules.suspicion import suspicious_pings

logger = logging.getLogger(__name__)


def _daily_sum(rows: Iterable[tuple[date, float]]) -> list[tuple[date, float]]:
    rows = list(rows)
    if not rows:
        return []
    df = pl.DataFrame(
        {"day": [r[0] for r in rows], "value": [float(r[1]) for r in rows]},
        schema={"day": pl.Date, "value": pl.Float64},
    )
    daily = df.group_by("day").agg(pl.col("value").sum()).sort("day")
    return list(zip(daily["day"].to_list(), daily["value"].to_list()))


def cargo_timeline(dataset: Dataset) -> list[tuple[date, float]]:
    """Total cargo tons per transaction day."""
    rows = []
    for tx in dataset.transactions:
        if tx.day is None:
            continue
        report = dataset.cargo_reports.get(tx.source)
        rows.append((tx.day, report.qty_tons if report else 0.0))
    return _daily_sum(rows)


def suspicious_ping_timeline(
    dataset: Dataset,
    index: GeometryIndex,
    company: str,
    resolver: LocationResolver | None = None,
) -> list[tuple[date, float]]:
    """Suspicious pings per day for one company's vessels."""
    resolver = resolver or LocationResolver(dataset)
    rows = []
    for vessel in dataset.vessels_of(company):
        for record in suspicious_pings(vessel, dataset.pings_for(vessel), resolver, index):
            if record.timestamp is not None:
                rows.append((record.timestamp.date(), 1.0))
    return _daily_sum(rows)
