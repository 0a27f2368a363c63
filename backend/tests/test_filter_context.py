"""Tests for the filter context value and its versioned holder."""
from datetime import date, datetime, timedelta, timezone

import pytest

from oceanwatch.errors import InvalidFilterError
from oceanwatch.modules.filter_context import ALL_COMPANIES, DateRange, FilterContext, FilterState


# --- DateRange ---

def test_date_range_inclusive():
    rng = DateRange(datetime(2035, 2, 1), datetime(2035, 2, 3))
    assert rng.contains(datetime(2035, 2, 1))
    assert rng.contains(datetime(2035, 2, 3))
    assert not rng.contains(datetime(2035, 2, 3) + timedelta(microseconds=1))
    assert not rng.contains(None)


def test_date_range_from_dates_covers_whole_days():
    rng = DateRange.from_dates(date(2035, 2, 1), date(2035, 2, 2))
    assert rng.start == datetime(2035, 2, 1, 0, 0, 0)
    assert rng.end == datetime(2035, 2, 2, 23, 59, 59)


def test_aware_bounds_stored_as_naive_utc():
    plus_two = timezone(timedelta(hours=2))
    rng = DateRange(datetime(2035, 2, 1, 2, 0, tzinfo=plus_two), datetime(2035, 2, 1, 12, 0, tzinfo=timezone.utc))
    assert rng.start == datetime(2035, 2, 1, 0, 0)
    assert rng.start.tzinfo is None and rng.end.tzinfo is None
    assert rng.contains(datetime(2035, 2, 1, 6, 0))


def test_inverted_range_rejected():
    with pytest.raises(InvalidFilterError):
        DateRange(datetime(2035, 2, 2), datetime(2035, 2, 1))


# --- FilterContext ---

def test_default_is_unscoped_and_unbounded():
    ctx = FilterContext()
    assert ctx.company == ALL_COMPANIES
    assert not ctx.is_scoped
    assert ctx.includes_time(None)


def test_undated_ping_excluded_once_range_set():
    ctx = FilterContext(date_range=DateRange(datetime(2035, 1, 1), datetime(2035, 12, 31)))
    assert not ctx.includes_time(None)
    assert ctx.includes_time(datetime(2035, 6, 1))


def test_with_company_returns_new_value():
    ctx = FilterContext()
    scoped = ctx.with_company("Bravo Fishing")
    assert scoped.is_scoped
    assert not ctx.is_scoped
    assert scoped.with_company(None).company == ALL_COMPANIES


def test_equal_contexts_compare_equal():
    rng = DateRange(datetime(2035, 2, 1), datetime(2035, 2, 2))
    assert FilterContext("X", rng) == FilterContext("X", rng)


# --- FilterState ---

def test_state_version_increments_on_every_change():
    state = FilterState()
    assert state.version == 0
    v1 = state.select_company("Bravo Fishing")
    v2 = state.select_dates(DateRange.from_dates(date(2035, 2, 1), date(2035, 2, 1)))
    assert (v1, v2) == (1, 2)
    assert state.context.company == "Bravo Fishing"
    assert state.context.date_range is not None


def test_superseded_version_not_current():
    state = FilterState()
    first = state.select_company("A")
    state.select_company("B")
    assert not state.is_current(first)
    assert state.is_current(state.version)


def test_reset_clears_filter_and_bumps_version():
    state = FilterState(FilterContext("A"))
    version = state.reset()
    assert version == 1
    assert state.context == FilterContext()
