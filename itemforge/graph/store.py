"""NetworkX-backed attribute store for item graphs."""

import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import networkx as nx


@dataclass
class GraphStats:
    """Statistics about the graph."""

    nodes: int
    edges: int
    node_types: dict[str, int]

    def __str__(self) -> str:
        types_str = ", ".join(
            f"{k}: {v}" for k, v in sorted(self.node_types.items(), key=lambda x: -x[1])
        )
        return f"Graph Stats:\n  Nodes: {self.nodes} ({types_str})\n  Edges: {self.edges}"


class ItemGraph:
    """Directed graph of items and the properties they link to.

    Node ids are unique strings. Every node carries its id again as the
    ``"id"`` attribute so that attribute snapshots are self-describing.
    At most one edge exists per (source, target) pair.
    """

    def __init__(self):
        self.graph = nx.DiGraph()

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    # Nodes

    def add_node(self, node_id: str, **attributes: Any) -> str:
        """Add a node. Re-adding an existing id merges the attributes."""
        attributes["id"] = node_id
        self.graph.add_node(node_id, **attributes)
        return node_id

    def has_node(self, node_id: str) -> bool:
        return self.graph.has_node(node_id)

    def nodes(self) -> list[str]:
        return list(self.graph.nodes)

    def filter_nodes(self, predicate: Callable[[str, dict], bool]) -> list[str]:
        """Return ids of nodes matching ``predicate(node_id, attributes)``, in store order."""
        return [n for n, data in self.graph.nodes(data=True) if predicate(n, data)]

    def get_node_attributes(self, node_id: str) -> dict[str, Any]:
        return self._node_data(node_id)

    def get_node_attribute(self, node_id: str, key: str, default: Any = None) -> Any:
        return self._node_data(node_id).get(key, default)

    def set_node_attribute(self, node_id: str, key: str, value: Any) -> None:
        self._node_data(node_id)[key] = value

    def update_node_attribute(
        self, node_id: str, key: str, updater: Callable[[Any], Any]
    ) -> Any:
        """Replace an attribute with ``updater(current)``; returns the new value."""
        data = self._node_data(node_id)
        data[key] = updater(data.get(key))
        return data[key]

    # Edges

    def add_edge(self, source: str, target: str, **attributes: Any) -> tuple[str, str]:
        if not self.graph.has_node(source):
            raise ValueError(f"Unknown source node: {source}")
        if not self.graph.has_node(target):
            raise ValueError(f"Unknown target node: {target}")
        self.graph.add_edge(source, target, **attributes)
        return (source, target)

    def has_edge(self, source: str, target: str) -> bool:
        return self.graph.has_edge(source, target)

    def edges(self) -> list[tuple[str, str]]:
        return list(self.graph.edges)

    def extremities(self, edge: tuple[str, str]) -> tuple[str, str]:
        source, target = edge
        self._edge_data(source, target)
        return source, target

    def get_edge_attributes(self, edge: tuple[str, str]) -> dict[str, Any]:
        return self._edge_data(*edge)

    def get_edge_attribute(
        self, source: str, target: str, key: str, default: Any = None
    ) -> Any:
        return self._edge_data(source, target).get(key, default)

    def set_edge_attribute(self, source: str, target: str, key: str, value: Any) -> None:
        self._edge_data(source, target)[key] = value

    def update_directed_edge_attribute(
        self, source: str, target: str, key: str, updater: Callable[[Any], Any]
    ) -> Any:
        """Replace an edge attribute with ``updater(current)``; returns the new value."""
        data = self._edge_data(source, target)
        data[key] = updater(data.get(key))
        return data[key]

    # Neighbors

    def neighbors(self, node_id: str) -> list[str]:
        """Out- and in-neighbors, each id once, out-neighbors first."""
        seen = dict.fromkeys(self.out_neighbors(node_id))
        seen.update(dict.fromkeys(self.in_neighbors(node_id)))
        return list(seen)

    def in_neighbors(self, node_id: str) -> list[str]:
        self._node_data(node_id)
        return list(self.graph.predecessors(node_id))

    def out_neighbors(self, node_id: str) -> list[str]:
        self._node_data(node_id)
        return list(self.graph.successors(node_id))

    # Summaries and persistence

    def get_stats(self) -> GraphStats:
        """Get statistics about the graph."""
        node_types = Counter(
            data.get("type") or "unknown" for _, data in self.graph.nodes(data=True)
        )
        return GraphStats(
            nodes=self.graph.number_of_nodes(),
            edges=self.graph.number_of_edges(),
            node_types=dict(node_types),
        )

    def to_node_link(self) -> dict[str, list[dict[str, Any]]]:
        """Flatten into ``{"nodes": [...], "links": [...]}`` in store order."""
        nodes = [{"id": node_id, **data} for node_id, data in self.graph.nodes(data=True)]
        links = [
            {"source": source, "target": target, **data}
            for source, target, data in self.graph.edges(data=True)
        ]
        return {"nodes": nodes, "links": links}

    @classmethod
    def from_node_link(cls, data: dict[str, Any]) -> "ItemGraph":
        """Rebuild a graph from the flattened node/link structure."""
        item_graph = cls()
        for node in data.get("nodes", []):
            attributes = dict(node)
            node_id = attributes.pop("id")
            item_graph.add_node(node_id, **attributes)
        for link in data.get("links", []):
            attributes = dict(link)
            source = attributes.pop("source")
            target = attributes.pop("target")
            item_graph.add_edge(source, target, **attributes)
        return item_graph

    def save(self, path: Path) -> None:
        """Save graph to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_node_link(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> "ItemGraph":
        """Load graph from JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_node_link(data)

    def _node_data(self, node_id: str) -> dict[str, Any]:
        try:
            return self.graph.nodes[node_id]
        except KeyError:
            raise KeyError(f"Unknown node: {node_id}") from None

    def _edge_data(self, source: str, target: str) -> dict[str, Any]:
        try:
            return self.graph.edges[source, target]
        except KeyError:
            raise KeyError(f"Unknown edge: {source} -> {target}") from None
