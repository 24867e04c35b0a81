"""Item policy for link aggregation.

Builds one ``Item`` per item node by folding its outgoing links: set, slot
and tier links copy the target's name, attribute links copy the edge
amount.
"""

from functools import partial
from typing import Any, Callable, TypeVar

from ..errors import MissingTargetNodeError
from ..export.aggregate import aggregate_links
from ..export.node_link import graph_to_node_link
from ..graph.schema import NodeType
from ..graph.store import ItemGraph
from ..processing.config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig
from .types import Item

R = TypeVar("R")


def item_node_filter(node: dict[str, Any]) -> bool:
    return node.get("type") == NodeType.ITEM.value


def create_empty_item() -> Item:
    return Item()


def populate_item_from_node(
    item: Item,
    node: dict[str, Any],
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> None:
    """Copy the source node's own fields onto a fresh item."""
    item.id = node["id"]
    item.name = node.get("name", "")
    item.type = node.get("type", "")
    item.description = node.get("description") or ""

    if item.type == NodeType.ITEM.value:
        item.weight = config.number_or_default(node.get("weight"))
        item.value = config.number_or_default(node.get("value"))

    # The value of an own set/slot/tier key is the fallback name, not the
    # node name. Links to set, slot and tier nodes override it.
    item.set = node.get("set") or item.set
    item.slot = node.get("slot") or item.slot
    item.tier = node.get("tier") or item.tier


def fold_item_link(
    item: Item,
    link: dict[str, Any],
    target_node: dict[str, Any] | None,
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> None:
    """Fold one outgoing link into ``item``.

    Raises:
        MissingTargetNodeError: the link points at a node that is not in the
            exported node list.
    """
    if target_node is None:
        raise MissingTargetNodeError(link["source"], link["target"])

    target_type = target_node.get("type")
    if target_type == NodeType.SET.value:
        item.set = target_node.get("name", "")
    elif target_type == NodeType.SLOT.value:
        item.slot = target_node.get("name", "")
    elif target_type == NodeType.TIER.value:
        item.tier = target_node.get("name", "")
    elif target_type == NodeType.ATTRIBUTE.value:
        item.attributes[target_node["id"]] = config.number_or_default(link.get("amount"))


def aggregate_items(
    rows: dict[str, list[dict[str, Any]]],
    finish: Callable[[dict[str, Item]], R],
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> R:
    """Run the link aggregator with the item policy."""
    return aggregate_links(
        rows,
        node_filter=item_node_filter,
        create_empty_item=create_empty_item,
        populate_item_from_node=partial(populate_item_from_node, config=config),
        process_link=partial(fold_item_link, config=config),
        finish=finish,
    )


def collect_items(
    graph: ItemGraph, config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG
) -> dict[str, Item]:
    """Aggregate every item in ``graph``, keyed by item id."""
    return aggregate_items(graph_to_node_link(graph), finish=dict, config=config)
