"""Lenient field parsers for raw payload records.

All parsers return None (or 0 for quantities) instead of raising, so a
malformed record is excluded or defaulted by the caller rather than aborting
the whole pass.
"""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, Optional

DAY_FORMAT = "%Y-%m-%d"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    Offset-aware values are converted to UTC; naive values are taken as-is.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_day(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` day string (transaction dates)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), DAY_FORMAT).date()
    except ValueError:
        return None


def to_quantity(value: Any) -> float:
    """Numeric quantity with missing / non-numeric / NaN values mapped to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        qty = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(qty) or math.isinf(qty):
        return 0.0
    return qty
