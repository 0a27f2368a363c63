"""Tests for payload loading.

Tests cover:
  - Node / link discrimination by type
  - All-or-nothing failure on a missing or malformed payload
  - Per-record leniency (bad dates, missing quantities, bad features)
"""
import json

import pytest

from oceanwatch.errors import DatasetLoadError
from oceanwatch.modules.dataset_loader import build_dataset, load_dataset
from oceanwatch.utils.parsing import parse_day, parse_timestamp, to_quantity

from conftest import make_geography, make_graph, make_location_nodes


def _write(tmp_path, graph=None, geography=None, locations=None):
    paths = {}
    for name, payload in (("graph", graph), ("geo", geography), ("loc", locations)):
        path = tmp_path / f"{name}.json"
        if payload is not None:
            path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
        paths[name] = path
    return paths["graph"], paths["geo"], paths["loc"]


# ── build_dataset ─────────────────────────────────────────────────────────────

def test_entities_split_by_type(dataset):
    assert [v.vessel_id for v in dataset.vessels] == ["v1", "v2", "v3", "v4"]
    assert set(dataset.cargo_reports) == {"doc1", "doc2", "doc3"}
    assert len(dataset.pings) == 15
    assert len(dataset.transactions) == 5
    assert len(dataset.zones) == 4
    assert dataset.place_points["Buoy A"] == (2.0, 2.0)


def test_missing_company_is_none(dataset):
    assert dataset.vessel("v4").company is None


def test_missing_quantity_defaults_to_zero(dataset):
    assert dataset.cargo_reports["doc2"].qty_tons == 0.0
    assert dataset.cargo_reports["doc1"].qty_tons == 10.0


def test_malformed_transaction_date_is_none(dataset):
    days = [tx.day for tx in dataset.transactions]
    assert days.count(None) == 1


def test_pings_grouped_by_vessel(dataset):
    assert len(dataset.pings_for(dataset.vessel("v2"))) == 6


def test_edges_key_accepted():
    graph = make_graph()
    graph["edges"] = graph.pop("links")
    ds = build_dataset(graph, make_geography(), make_location_nodes())
    assert len(ds.pings) == 15


def test_unparseable_ping_time_kept_as_none():
    graph = make_graph()
    graph["links"].append({"type": "Event.TransportEvent.TransponderPing", "source": "L-A", "target": "v3", "time": "soon"})
    ds = build_dataset(graph, make_geography(), make_location_nodes())
    assert ds.pings[-1].timestamp is None


def test_malformed_zone_feature_skipped():
    geo = make_geography()
    geo["features"].append({
        "type": "Feature",
        "properties": {"Name": "Broken", "*Kind": "Ecological Preserve"},
        "geometry": {"type": "Polygon", "coordinates": [[[0, 0]]]},
    })
    ds = build_dataset(make_graph(), geo, make_location_nodes())
    assert "Broken" not in [z.name for z in ds.zones]


def test_missing_top_level_key_fails():
    with pytest.raises(DatasetLoadError) as exc:
        build_dataset({"nodes": []}, make_geography(), make_location_nodes())
    assert exc.value.source == "graph"


# ── load_dataset ──────────────────────────────────────────────────────────────

def test_load_from_files(tmp_path):
    paths = _write(tmp_path, make_graph(), make_geography(), make_location_nodes())
    ds = load_dataset(*paths)
    assert len(ds.vessels) == 4


def test_missing_file_is_fatal(tmp_path):
    paths = _write(tmp_path, make_graph(), make_geography(), None)
    with pytest.raises(DatasetLoadError) as exc:
        load_dataset(*paths)
    assert exc.value.source == "location nodes"


def test_invalid_json_is_fatal(tmp_path):
    paths = _write(tmp_path, make_graph(), "{not json", make_location_nodes())
    with pytest.raises(DatasetLoadError) as exc:
        load_dataset(*paths)
    assert exc.value.source == "geography"


# ── Field parsers ─────────────────────────────────────────────────────────────

def test_parse_timestamp_variants():
    assert parse_timestamp("2035-02-01T06:30:00").hour == 6
    assert parse_timestamp("2035-02-01T06:30:00Z").tzinfo is None
    assert parse_timestamp("2035-02-01T08:30:00+02:00").hour == 6
    assert parse_timestamp("garbage") is None
    assert parse_timestamp(None) is None


def test_parse_day():
    assert parse_day("2035-02-01").day == 1
    assert parse_day("02/01/2035") is None


def test_to_quantity():
    assert to_quantity("12.5") == 12.5
    assert to_quantity(None) == 0.0
    assert to_quantity("n/a") == 0.0
    assert to_quantity(float("nan")) == 0.0
