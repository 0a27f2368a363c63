"""Tests for per-zone investigation."""
from datetime import timedelta

import pytest

from oceanwatch.errors import UnknownZoneError
from oceanwatch.modules.filter_context import DateRange, FilterContext
from oceanwatch.modules.zone_investigation import investigate_zone

from conftest import BASELINE, T0


def test_groups_by_company(dataset, index, zone_config, resolver):
    result = investigate_zone(dataset, index, "Alpha Preserve", zone_config=zone_config, resolver=resolver)
    assert result.total_pings == 6
    # Equal counts keep the order of each company's first ping
    assert [(c.company, c.pings) for c in result.companies] == [(BASELINE, 2), ("Unknown", 2), ("Bravo Fishing", 2)]
    assert result.companies[1].vessels == ["Drifter"]
    assert result.species == ["Wrasse", "Tuna"]


def test_overlap_counts_for_second_zone(dataset, index):
    result = investigate_zone(dataset, index, "Beta Preserve")
    assert [(c.company, c.pings) for c in result.companies] == [
        ("Bravo Fishing", 3),
        (BASELINE, 2),
        ("Charlie Co", 1),
    ]
    assert result.species == []


def test_date_range_applies(dataset, index):
    ctx = FilterContext(date_range=DateRange(T0, T0 + timedelta(hours=1)))
    result = investigate_zone(dataset, index, "Alpha Preserve", ctx)
    assert [(c.company, c.pings) for c in result.companies] == [("Unknown", 2), (BASELINE, 1), ("Bravo Fishing", 1)]


def test_company_selector_ignored(dataset, index):
    result = investigate_zone(dataset, index, "Delta Preserve", FilterContext(company=BASELINE))
    assert [c.company for c in result.companies] == ["Bravo Fishing"]


@pytest.mark.parametrize("name", ["Gamma Ground", "Atlantis"])
def test_unknown_or_allowed_zone_rejected(dataset, index, name):
    with pytest.raises(UnknownZoneError):
        investigate_zone(dataset, index, name)
