"""Generate a synthetic dataset for end-to-end demo.

Writes the three payloads the loader expects:
  data/mc2.json                                         — graph (vessels, documents, pings, transactions)
  data/Oceanus Information/Oceanus Geography.geojson   — preserves, fishing grounds, place points
  data/Oceanus Information/Oceanus Geography Nodes.json — location id → place name

Vessels and scenarios:
  SEA-1 (SouthSeafood Express Corp): pings inside Ghoti Preserve, 20h transponder gap
  SEA-2 (SouthSeafood Express Corp): single ping at a preserve buoy
  NET-1 (Nets & Lines Ltd): repeated pings in Nemo Reef
  NET-2 (Nets & Lines Ltd): ping at a place with no geometry (dropped)
  CAT-1 (Cato Fisheries): legal fishing ground only → no suspicion
  GHOST (no company): Don Limpet Preserve pings, excluded from company stats

Usage:
    python scripts/generate_sample_data.py [output_dir]
"""
from __future__ import annotations

import json
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

random.seed(42)

BASE_DATE = datetime(2035, 2, 1)
PING = "Event.TransportEvent.TransponderPing"
TRANSACTION = "Event.Transaction"


def _square(lon: float, lat: float, size: float) -> list[list[float]]:
    return [[lon, lat], [lon + size, lat], [lon + size, lat + size], [lon, lat + size], [lon, lat]]


def _zone(name: str, kind: str, lon: float, lat: float, size: float) -> dict:
    return {
        "type": "Feature",
        "properties": {"Name": name, "*Kind": kind},
        "geometry": {"type": "Polygon", "coordinates": [_square(lon, lat, size)]},
    }


def _place(name: str, lon: float, lat: float) -> dict:
    return {
        "type": "Feature",
        "properties": {"Name": name, "*Kind": "Buoy"},
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


# ─── Geography ───────────────────────────────────────────────────────────────
ZONES = [
    _zone("Ghoti Preserve", "Ecological Preserve", -166.0, 39.0, 1.0),
    _zone("Nemo Reef", "Ecological Preserve", -165.0, 40.0, 0.5),
    _zone("Don Limpet Preserve", "Ecological Preserve", -164.0, 39.0, 0.8),
    _zone("Wrasse Beds", "Fishing Ground", -167.0, 38.0, 1.0),
]
PLACES = {
    "L-GHOTI-1": ("Ghoti Buoy 1", -165.6, 39.4),
    "L-GHOTI-2": ("Ghoti Buoy 2", -165.2, 39.7),
    "L-NEMO": ("Nemo Buoy", -164.8, 40.2),
    "L-LIMPET": ("Limpet Buoy", -163.7, 39.3),
    "L-WRASSE": ("Wrasse Buoy", -166.5, 38.5),
    "L-HARBOR": ("Haacklee Harbor", -168.0, 37.5),
}
# Referenced by a ping but absent from the geography payload
UNMAPPED = {"L-VOID": "Nowhere Rock"}

# ─── Graph ───────────────────────────────────────────────────────────────────
VESSELS = [
    ("SEA-1", "Snapper Queen", "SouthSeafood Express Corp"),
    ("SEA-2", "Roach Runner", "SouthSeafood Express Corp"),
    ("NET-1", "Marlin Dash", "Nets & Lines Ltd"),
    ("NET-2", "Lost Tern", "Nets & Lines Ltd"),
    ("CAT-1", "Cato Star", "Cato Fisheries"),
    ("GHOST", "Unregistered Hull", None),
]

SCHEDULE = {
    # vessel id → [(hours after BASE_DATE, location id)]
    "SEA-1": [(0, "L-HARBOR"), (4, "L-GHOTI-1"), (8, "L-GHOTI-2"), (28, "L-GHOTI-1"), (30, "L-HARBOR")],
    "SEA-2": [(50, "L-LIMPET")],
    "NET-1": [(2, "L-NEMO"), (6, "L-NEMO"), (10, "L-NEMO"), (14, "L-HARBOR")],
    "NET-2": [(3, "L-VOID"), (5, "L-HARBOR")],
    "CAT-1": [(1, "L-WRASSE"), (5, "L-WRASSE"), (9, "L-HARBOR")],
    "GHOST": [(12, "L-LIMPET"), (16, "L-LIMPET")],
}


def build_payloads() -> tuple[dict, dict, dict]:
    nodes = []
    for vessel_id, name, company in VESSELS:
        node = {"id": vessel_id, "type": "Entity.Vessel.FishingVessel", "name": name}
        if company:
            node["company"] = company
        nodes.append(node)

    links = []
    for vessel_id, stops in SCHEDULE.items():
        for hours, location_id in stops:
            ts = BASE_DATE + timedelta(hours=hours, minutes=random.randint(0, 30))
            links.append({
                "type": PING,
                "source": location_id,
                "target": vessel_id,
                "time": ts.isoformat(),
            })

    for day in range(5):
        doc_id = f"cargo-{day}"
        nodes.append({
            "id": doc_id,
            "type": "Entity.Document.DeliveryReport",
            "qty_tons": round(random.uniform(5, 40), 2),
        })
        links.append({
            "type": TRANSACTION,
            "source": doc_id,
            "target": "L-HARBOR",
            "date": (BASE_DATE + timedelta(days=day)).strftime("%Y-%m-%d"),
        })

    graph = {"directed": True, "multigraph": True, "nodes": nodes, "links": links}
    geography = {
        "type": "FeatureCollection",
        "features": ZONES + [_place(name, lon, lat) for name, lon, lat in PLACES.values()],
    }
    location_nodes = {
        "nodes": [{"id": loc_id, "Name": name} for loc_id, (name, _, _) in PLACES.items()]
        + [{"id": loc_id, "Name": name} for loc_id, name in UNMAPPED.items()]
    }
    return graph, geography, location_nodes


def write_payloads(output_dir: Path) -> dict[str, Path]:
    graph, geography, location_nodes = build_payloads()
    info_dir = output_dir / "Oceanus Information"
    info_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "graph": output_dir / "mc2.json",
        "geography": info_dir / "Oceanus Geography.geojson",
        "locations": info_dir / "Oceanus Geography Nodes.json",
    }
    paths["graph"].write_text(json.dumps(graph, indent=2))
    paths["geography"].write_text(json.dumps(geography, indent=2))
    paths["locations"].write_text(json.dumps(location_nodes, indent=2))
    return paths


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).resolve().parent.parent.parent / "data"
    written = write_payloads(out)
    for label, path in written.items():
        print(f"{label}: {path}")
