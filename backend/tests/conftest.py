"""Shared test fixtures: a small in-memory dataset with known answers.

Geometry (planar lon/lat):
  Alpha Preserve  — square 0..10 with a hole 4..6          (forbidden)
  Beta Preserve   — square 8..14 x 0..10, overlaps Alpha   (forbidden)
  Delta Preserve  — MultiPolygon, squares at 40..42, 50..52 (forbidden)
  Gamma Ground    — square 20..30                          (fishing ground)

Places: Buoy A (2,2) in Alpha; Hole Buoy (5,5) in Alpha's hole; Overlap Buoy
(9,5) in Alpha AND Beta; Buoy B (12,5) in Beta; Gamma Buoy (25,25);
Open Sea (100,0); Delta Buoy (51,1) in Delta's second part.

Vessels (T0 = 2035-02-01 00:00):
  v1 SouthSeafood Express Corp: A@T0, Overlap@+5h, B@+20h       → Alpha 2, Beta 1
  v2 Bravo Fishing: Overlap@+1h, Overlap@+2h, B@+3h, Hole@+4h,
                    unknown location@+5h, Delta@+6h              → Alpha 2, Beta 1, Delta 1
  v3 Charlie Co: Gamma@+2h, Sea@+3h, unmapped place@+30h, B@+34h → Beta 1
  v4 (no company): A@T0, A@+1h                                   → excluded from stats
"""
from datetime import datetime, timedelta

import pytest

from oceanwatch.modules.dataset_loader import build_dataset
from oceanwatch.modules.geometry_index import GeometryIndex
from oceanwatch.modules.location_resolver import LocationResolver
from oceanwatch.modules.query_facade import QueryFacade
from oceanwatch.utils.zone_config import ZoneConfig

PING = "Event.TransportEvent.TransponderPing"
TRANSACTION = "Event.Transaction"
T0 = datetime(2035, 2, 1, 0, 0, 0)
BASELINE = "SouthSeafood Express Corp"


def square(lon, lat, size):
    return [[lon, lat], [lon + size, lat], [lon + size, lat + size], [lon, lat + size], [lon, lat]]


def ping(source, target, hours):
    return {"type": PING, "source": source, "target": target, "time": (T0 + timedelta(hours=hours)).isoformat()}


def make_geography():
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"Name": "Alpha Preserve", "*Kind": "Ecological Preserve"},
                "geometry": {"type": "Polygon", "coordinates": [square(0, 0, 10), square(4, 4, 2)]},
            },
            {
                "type": "Feature",
                "properties": {"Name": "Beta Preserve", "*Kind": "Ecological Preserve"},
                "geometry": {"type": "Polygon", "coordinates": [[[8, 0], [14, 0], [14, 10], [8, 10], [8, 0]]]},
            },
            {
                "type": "Feature",
                "properties": {"Name": "Gamma Ground", "*Kind": "Fishing Ground"},
                "geometry": {"type": "Polygon", "coordinates": [square(20, 20, 10)]},
            },
            {
                "type": "Feature",
                "properties": {"Name": "Delta Preserve", "*Kind": "Ecological Preserve"},
                "geometry": {"type": "MultiPolygon", "coordinates": [[square(40, 0, 2)], [square(50, 0, 2)]]},
            },
            {"type": "Feature", "properties": {"Name": "Buoy A"}, "geometry": {"type": "Point", "coordinates": [2, 2]}},
            {"type": "Feature", "properties": {"Name": "Hole Buoy"}, "geometry": {"type": "Point", "coordinates": [5, 5]}},
            {"type": "Feature", "properties": {"Name": "Overlap Buoy"}, "geometry": {"type": "Point", "coordinates": [9, 5]}},
            {"type": "Feature", "properties": {"Name": "Buoy B"}, "geometry": {"type": "Point", "coordinates": [12, 5]}},
            {"type": "Feature", "properties": {"Name": "Gamma Buoy"}, "geometry": {"type": "Point", "coordinates": [25, 25]}},
            {"type": "Feature", "properties": {"Name": "Open Sea"}, "geometry": {"type": "Point", "coordinates": [100, 0]}},
            {"type": "Feature", "properties": {"Name": "Delta Buoy"}, "geometry": {"type": "Point", "coordinates": [51, 1]}},
        ],
    }


def make_location_nodes():
    names = {
        "L-A": "Buoy A",
        "L-HOLE": "Hole Buoy",
        "L-AB": "Overlap Buoy",
        "L-B": "Buoy B",
        "L-C": "Gamma Buoy",
        "L-SEA": "Open Sea",
        "L-D2": "Delta Buoy",
        "L-MISSING": "Unmapped Rock",
    }
    return {"nodes": [{"id": k, "Name": v} for k, v in names.items()]}


def make_graph():
    nodes = [
        {"id": "v1", "type": "Entity.Vessel.FishingVessel", "name": "Alpha One", "company": BASELINE},
        {"id": "v2", "type": "Entity.Vessel.FishingVessel", "name": "Bravo", "company": "Bravo Fishing"},
        {"id": "v3", "type": "Entity.Vessel.FishingVessel", "name": "Charlie", "company": "Charlie Co"},
        {"id": "v4", "type": "Entity.Vessel.Other", "name": "Drifter"},
        {"id": "doc1", "type": "Entity.Document.DeliveryReport", "qty_tons": 10},
        {"id": "doc2", "type": "Entity.Document.DeliveryReport", "qty_tons": "n/a"},
        {"id": "doc3", "type": "Entity.Document.DeliveryReport", "qty_tons": 5.5},
        {"id": "L-A", "type": "Location.Point"},
    ]
    links = [
        ping("L-A", "v1", 0),
        ping("L-AB", "v1", 5),
        ping("L-B", "v1", 20),
        ping("L-AB", "v2", 1),
        ping("L-AB", "v2", 2),
        ping("L-B", "v2", 3),
        ping("L-HOLE", "v2", 4),
        ping("L-UNKNOWN", "v2", 5),
        ping("L-D2", "v2", 6),
        ping("L-C", "v3", 2),
        ping("L-SEA", "v3", 3),
        ping("L-MISSING", "v3", 30),
        ping("L-B", "v3", 34),
        ping("L-A", "v4", 0),
        ping("L-A", "v4", 1),
        {"type": TRANSACTION, "source": "doc1", "target": "city", "date": "2035-02-01"},
        {"type": TRANSACTION, "source": "doc2", "target": "city", "date": "2035-02-01"},
        {"type": TRANSACTION, "source": "doc3", "target": "city", "date": "2035-02-02"},
        {"type": TRANSACTION, "source": "doc1", "target": "city", "date": "02/03/2035"},
        {"type": TRANSACTION, "source": "doc-missing", "target": "city", "date": "2035-02-03"},
        {"type": "Event.Communication", "source": "v1", "target": "v2", "time": T0.isoformat()},
    ]
    return {"directed": True, "nodes": nodes, "links": links}


@pytest.fixture
def payloads():
    return make_graph(), make_geography(), make_location_nodes()


@pytest.fixture
def dataset(payloads):
    return build_dataset(*payloads)


@pytest.fixture
def zone_config():
    return ZoneConfig(
        suspicious_kinds=frozenset({"Ecological Preserve"}),
        species={"Alpha Preserve": ("Wrasse", "Tuna")},
    )


@pytest.fixture
def index(dataset, zone_config):
    return GeometryIndex(dataset.zones, zone_config.suspicious_kinds, zone_config.zone_order)


@pytest.fixture
def resolver(dataset):
    return LocationResolver(dataset)


@pytest.fixture
def facade(dataset, zone_config):
    return QueryFacade(dataset, zone_config=zone_config, baseline_company=BASELINE)
