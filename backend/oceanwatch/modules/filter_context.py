"""Filter context: the active company selector and date range.

A ``FilterContext`` is an immutable value passed into every query; there is
no ambient "current filter". ``FilterState`` wraps the value for callers that
react to user input: each change bumps a monotonically increasing version so
a result computed for a superseded filter can be recognised and discarded.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timezone
from typing import Optional

from oceanwatch.errors import InvalidFilterError

logger = logging.getLogger(__name__)

# Company selector sentinel meaning "no company restriction"
ALL_COMPANIES = "all"


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` timestamp range.

    Offset-aware bounds are stored as naive UTC, matching ping timestamps.
    """
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _naive_utc(self.start))
        object.__setattr__(self, "end", _naive_utc(self.end))
        if self.start > self.end:
            raise InvalidFilterError(f"Date range start {self.start} is after end {self.end}")

    @classmethod
    def from_dates(cls, start: date, end: date) -> "DateRange":
        """Whole calendar days: ``start 00:00:00`` through ``end 23:59:59``."""
        return cls(
            datetime.combine(start, time(0, 0, 0)),
            datetime.combine(end, time(23, 59, 59)),
        )

    def contains(self, ts: Optional[datetime]) -> bool:
        return ts is not None and self.start <= ts <= self.end


@dataclass(frozen=True)
class FilterContext:
    company: str = ALL_COMPANIES
    date_range: Optional[DateRange] = None

    @property
    def is_scoped(self) -> bool:
        return self.company != ALL_COMPANIES

    def includes_time(self, ts: Optional[datetime]) -> bool:
        """Whether a timestamp passes the date restriction.

        With no range every ping passes, including ones whose timestamp failed
        to parse; with a range those are excluded.
        """
        if self.date_range is None:
            return True
        return self.date_range.contains(ts)

    def with_company(self, company: Optional[str]) -> "FilterContext":
        return replace(self, company=company or ALL_COMPANIES)

    def with_date_range(self, date_range: Optional[DateRange]) -> "FilterContext":
        return replace(self, date_range=date_range)

    def reset(self) -> "FilterContext":
        return FilterContext()


class FilterState:
    """Holds the current ``FilterContext`` and its version counter."""

    def __init__(self, context: Optional[FilterContext] = None):
        self._context = context or FilterContext()
        self._version = 0

    @property
    def context(self) -> FilterContext:
        return self._context

    @property
    def version(self) -> int:
        return self._version

    def update(self, context: FilterContext) -> int:
        """Replace the active filter; returns the new version.

        The version is bumped on every call, even when the value is unchanged,
        so each trigger maps to exactly one recomputation.
        """
        self._context = context
        self._version += 1
        logger.debug("Filter v%d: company=%s range=%s", self._version, context.company, context.date_range)
        return self._version

    def select_company(self, company: Optional[str]) -> int:
        return self.update(self._context.with_company(company))

    def select_dates(self, date_range: Optional[DateRange]) -> int:
        return self.update(self._context.with_date_range(date_range))

    def reset(self) -> int:
        return self.update(FilterContext())

    def is_current(self, version: int) -> bool:
        return version == self._version
