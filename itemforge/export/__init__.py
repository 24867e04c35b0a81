"""Graph exports: node/link flattening and per-source link aggregation."""

from .aggregate import aggregate_links
from .node_link import graph_to_node_link, write_node_link_js

__all__ = ["aggregate_links", "graph_to_node_link", "write_node_link_js"]
