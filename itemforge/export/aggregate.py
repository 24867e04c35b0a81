"""Fold each source node's outgoing links into one aggregate record."""

from typing import Any, Callable, TypeVar

from ..errors import MissingSourceNodeError
from .node_link import NodeLinkData

T = TypeVar("T")
R = TypeVar("R")

NodeData = dict[str, Any]
LinkData = dict[str, Any]


def _find_node(
    nodes: list[NodeData],
    node_id: str,
    node_filter: Callable[[NodeData], bool] | None = None,
) -> NodeData | None:
    for node in nodes:
        if node["id"] != node_id:
            continue
        if node_filter is None or node_filter(node):
            return node
    return None


def aggregate_links(
    rows: NodeLinkData,
    *,
    create_empty_item: Callable[[], T],
    populate_item_from_node: Callable[[T, NodeData], None],
    process_link: Callable[[T, LinkData, NodeData | None], None],
    finish: Callable[[dict[str, T]], R],
    node_filter: Callable[[NodeData], bool] | None = None,
) -> R:
    """Build one record per distinct link source and hand them to ``finish``.

    Links are scanned in order. The first link from a source creates its
    record from the first node with that id accepted by ``node_filter``;
    every link from that source, the first included, is then folded in with
    ``process_link(record, link, target_node)``, where ``target_node`` is
    None when the target id is not among the nodes.

    ``finish`` receives the records keyed by source id in first-seen order,
    and its return value is returned. Nodes without outgoing links get no
    record.

    Raises:
        MissingSourceNodeError: a link's source is absent or rejected by
            ``node_filter``. Nothing is passed to ``finish`` in that case.
    """
    nodes = rows["nodes"]
    items: dict[str, T] = {}

    for link in rows["links"]:
        source = link["source"]
        if source in items:
            item = items[source]
        else:
            node = _find_node(nodes, source, node_filter)
            if node is None:
                raise MissingSourceNodeError(source, link["target"])
            item = create_empty_item()
            populate_item_from_node(item, node)

        target_node = _find_node(nodes, link["target"])
        process_link(item, link, target_node)
        items[source] = item

    return finish(items)
