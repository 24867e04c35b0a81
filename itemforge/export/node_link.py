"""Flatten a graph into the node/link structure used by viewers and aggregation."""

import json
import logging
from pathlib import Path
from typing import Any

from ..graph.store import ItemGraph

log = logging.getLogger(__name__)

NodeLinkData = dict[str, list[dict[str, Any]]]


def graph_to_node_link(graph: ItemGraph) -> NodeLinkData:
    """Return ``{"nodes": [{id, ...}], "links": [{source, target, ...}]}``.

    Node and link order mirror the graph's own iteration order.
    """
    return graph.to_node_link()


def write_node_link_js(data: NodeLinkData, path: Path, indent: int | None = None) -> Path:
    """Write ``const graph=<json>`` for the static HTML viewer."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"const graph={json.dumps(data, indent=indent, ensure_ascii=False)}",
        encoding="utf-8",
    )
    log.info(f"Generated: {path}")
    return path
