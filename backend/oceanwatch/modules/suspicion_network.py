"""Company→zone suspicion network as plain nodes and weighted links.

Only flows whose company is among the displayed companies become links; a
node is created for each endpoint of a kept flow. Node weights are the full
company / zone totals of the aggregate.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from oceanwatch.models.base import NetworkNodeTypeEnum
from oceanwatch.modules.suspicion import SuspicionAggregate


@dataclass(frozen=True)
class NetworkNode:
    id: str
    type: NetworkNodeTypeEnum
    pings: int


@dataclass(frozen=True)
class NetworkLink:
    source: str
    target: str
    value: int


@dataclass
class SuspicionNetwork:
    nodes: list[NetworkNode] = field(default_factory=list)
    links: list[NetworkLink] = field(default_factory=list)


def build_network(aggregate: SuspicionAggregate, companies: Iterable[str]) -> SuspicionNetwork:
    shown = set(companies)
    network = SuspicionNetwork()
    seen: set[tuple[str, str]] = set()

    def _add(node_id: str, node_type: NetworkNodeTypeEnum, pings: int) -> None:
        if (node_type.value, node_id) not in seen:
            seen.add((node_type.value, node_id))
            network.nodes.append(NetworkNode(node_id, node_type, pings))

    for (company, zone), value in aggregate.flows.items():
        if company not in shown:
            continue
        _add(company, NetworkNodeTypeEnum.COMPANY, aggregate.company_totals.get(company, 0))
        _add(zone, NetworkNodeTypeEnum.ZONE, aggregate.zone_totals.get(zone, 0))
        network.links.append(NetworkLink(company, zone, value))
    return network
