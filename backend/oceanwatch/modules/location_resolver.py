"""Resolves a ping's source location to map coordinates.

Resolution chain: location id → location node name → geography Point
feature with the same Name → (lon, lat). Any missing link means the ping is
unresolvable and is silently dropped by callers.
"""
from __future__ import annotations

import logging
from typing import Optional

from oceanwatch.models.dataset import Dataset
from oceanwatch.models.event import PingEvent

logger = logging.getLogger(__name__)


class LocationResolver:
    def __init__(self, dataset: Dataset):
        self._dataset = dataset

    def resolve(self, location_id: str) -> Optional[tuple[float, float]]:
        node = self._dataset.location_nodes.get(location_id)
        if node is None or not node.name:
            return None
        return self._dataset.place_points.get(node.name)

    def resolve_ping(self, ping: PingEvent) -> Optional[tuple[float, float]]:
        point = self.resolve(ping.source)
        if point is None:
            logger.debug("Dropping ping %s -> %s: location not resolvable", ping.source, ping.target)
        return point
