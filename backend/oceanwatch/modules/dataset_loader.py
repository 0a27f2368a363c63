"""Dataset loader: reads the three input payloads into an immutable Dataset.

Inputs:
  - graph payload (``nodes`` + ``links``): vessels, cargo documents, pings
    and transactions, discriminated by node/link ``type``.
  - geography FeatureCollection: zone polygons and named place points.
  - location-node payload (``nodes``): location id → place name.

Loading is all-or-nothing: if any payload is missing, unreadable or has the
wrong top-level shape a DatasetLoadError is raised and no Dataset is built.
Per-record defects (unknown node types, unparseable times, non-polygon
features) never fail the load.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from shapely.errors import ShapelyError

from oceanwatch.config import settings
from oceanwatch.errors import DatasetLoadError
from oceanwatch.models.dataset import Dataset
from oceanwatch.models.event import CargoReport, PingEvent, TransactionEvent
from oceanwatch.models.location import LocationNode
from oceanwatch.models.vessel import Vessel
from oceanwatch.models.zone import Zone

logger = logging.getLogger(__name__)


def _read_json(path: Path, label: str) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise DatasetLoadError(label, f"file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetLoadError(label, str(e))


def _require_list(payload: Any, key: str, label: str, *alternatives: str) -> list:
    if not isinstance(payload, dict):
        raise DatasetLoadError(label, "top-level value is not an object")
    for candidate in (key, *alternatives):
        value = payload.get(candidate)
        if isinstance(value, list):
            return value
    raise DatasetLoadError(label, f"missing '{key}' list")


def _node_type(node: dict) -> str:
    return node.get("type") or ""


def build_dataset(graph: Any, geography: Any, location_nodes: Any) -> Dataset:
    """Build a Dataset from already-parsed payloads."""
    nodes = _require_list(graph, "nodes", "graph")
    links = _require_list(graph, "links", "graph", "edges")
    features = _require_list(geography, "features", "geography")
    locations = _require_list(location_nodes, "nodes", "location nodes")

    vessels: list[Vessel] = []
    cargo_reports: dict[str, CargoReport] = {}
    for node in nodes:
        if not isinstance(node, dict) or "id" not in node:
            continue
        node_type = _node_type(node)
        if node_type.startswith(settings.VESSEL_NODE_PREFIX):
            vessels.append(Vessel.from_node(node))
        elif node_type.startswith(settings.DOCUMENT_NODE_PREFIX):
            report = CargoReport.from_node(node)
            cargo_reports.setdefault(report.document_id, report)

    pings: list[PingEvent] = []
    transactions: list[TransactionEvent] = []
    for link in links:
        if not isinstance(link, dict):
            continue
        link_type = link.get("type")
        if link_type == settings.PING_EVENT_TYPE:
            pings.append(PingEvent.from_link(link))
        elif link_type == settings.TRANSACTION_EVENT_TYPE:
            transactions.append(TransactionEvent.from_link(link))

    location_index: dict[str, LocationNode] = {}
    for node in locations:
        if isinstance(node, dict) and "id" in node:
            loc = LocationNode.from_node(node)
            location_index.setdefault(loc.location_id, loc)

    zones: list[Zone] = []
    place_points: dict[str, tuple[float, float]] = {}
    for feature in features:
        if not isinstance(feature, dict):
            continue
        geometry = feature.get("geometry") or {}
        if geometry.get("type") == "Point":
            name = (feature.get("properties") or {}).get("Name")
            coords = geometry.get("coordinates") or []
            if name and len(coords) >= 2 and all(isinstance(c, (int, float)) for c in coords[:2]):
                place_points.setdefault(name, (float(coords[0]), float(coords[1])))
            continue
        try:
            zone = Zone.from_feature(feature)
        except (ShapelyError, ValueError, TypeError, AttributeError, IndexError) as e:
            logger.warning("Skipping malformed zone feature: %s", e)
            continue
        if zone is not None:
            zones.append(zone)

    unparsed = sum(1 for p in pings if p.timestamp is None)
    if unparsed:
        logger.warning("%d pings have an unparseable time and are excluded from time-based views", unparsed)

    dataset = Dataset(
        vessels=tuple(vessels),
        pings=tuple(pings),
        transactions=tuple(transactions),
        cargo_reports=cargo_reports,
        location_nodes=location_index,
        place_points=place_points,
        zones=tuple(zones),
    )
    logger.info(
        "Dataset loaded: %d vessels, %d pings, %d transactions, %d zones, %d places",
        len(vessels), len(pings), len(transactions), len(zones), len(place_points),
    )
    return dataset


def load_dataset(
    graph_path: Optional[str | Path] = None,
    geography_path: Optional[str | Path] = None,
    location_nodes_path: Optional[str | Path] = None,
) -> Dataset:
    """Read all three payloads from disk and build the Dataset.

    Raises DatasetLoadError on the first failing payload.
    """
    graph = _read_json(Path(graph_path or settings.GRAPH_PATH), "graph")
    geography = _read_json(Path(geography_path or settings.GEOGRAPHY_PATH), "geography")
    location_nodes = _read_json(Path(location_nodes_path or settings.LOCATION_NODES_PATH), "location nodes")
    return build_dataset(graph, geography, location_nodes)
