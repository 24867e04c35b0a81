"""Neighbor lookup and grouping by node type."""

from typing import Any, Iterable

from ..graph.store import ItemGraph
from .config import DIRECTIONS

UNKNOWN_TYPE = "unknown"

NeighborRecord = dict[str, Any]


def get_connected_nodes(
    graph: ItemGraph, node_id: str, direction: str = "out"
) -> list[NeighborRecord]:
    """Return ``{"id": ..., **attributes}`` snapshots of a node's neighbors.

    Records are copies taken at call time, in the order the graph reports
    the neighbors.
    """
    if direction == "in":
        neighbor_ids = graph.in_neighbors(node_id)
    elif direction == "out":
        neighbor_ids = graph.out_neighbors(node_id)
    elif direction == "both":
        neighbor_ids = graph.neighbors(node_id)
    else:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got {direction!r}")

    return [
        {**graph.get_node_attributes(neighbor_id), "id": neighbor_id}
        for neighbor_id in neighbor_ids
    ]


def group_connected_nodes_by_type(
    graph: ItemGraph, node_id: str, direction: str = "out"
) -> dict[str, list[NeighborRecord]]:
    """Partition a node's neighbors by their ``type`` attribute.

    Neighbors without a type (or with an empty one) go under ``"unknown"``.
    """
    grouped: dict[str, list[NeighborRecord]] = {}
    for node in get_connected_nodes(graph, node_id, direction):
        grouped.setdefault(node.get("type") or UNKNOWN_TYPE, []).append(node)
    return grouped


def get_edge_amounts(
    graph: ItemGraph,
    source: str,
    targets: Iterable[NeighborRecord],
    default: float = 0,
) -> dict[str, float]:
    """Map each target id to the ``amount`` on the edge from ``source``."""
    amounts = {}
    for target in targets:
        amount = graph.get_edge_attribute(source, target["id"], "amount")
        amounts[target["id"]] = default if amount is None else amount
    return amounts
