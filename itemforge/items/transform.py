"""Pipeline that turns item nodes into ``Item`` records via grouped neighbors."""

from typing import Any

from ..graph.schema import NodeType
from ..graph.store import ItemGraph
from ..processing.config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig
from ..processing.neighbors import NeighborRecord, get_edge_amounts
from ..processing.pipeline import ProcessingContext, ProcessingPipeline
from ..processing.steps import create_node_filter, create_node_transformer
from .types import Item

UNKNOWN_NAME = "Unknown"


def is_item_node(_node_id: str, attributes: dict[str, Any]) -> bool:
    return attributes.get("type") == NodeType.ITEM.value


def _first_name(grouped: dict[str, list[NeighborRecord]], node_type: NodeType) -> str:
    nodes = grouped.get(node_type.value) or []
    return (nodes[0].get("name") if nodes else None) or UNKNOWN_NAME


def build_item(
    node_id: str,
    attributes: dict[str, Any],
    grouped: dict[str, list[NeighborRecord]],
    context: ProcessingContext,
) -> Item:
    config = context.config
    amounts = get_edge_amounts(
        context.graph,
        node_id,
        grouped.get(NodeType.ATTRIBUTE.value, []),
        default=config.missing_number,
    )
    return Item(
        id=node_id,
        name=attributes.get("name", ""),
        type=attributes.get("type", ""),
        description=attributes.get("description") or "",
        weight=config.number_or_default(attributes.get("weight")),
        value=config.number_or_default(attributes.get("value")),
        set=_first_name(grouped, NodeType.SET),
        slot=_first_name(grouped, NodeType.SLOT),
        tier=_first_name(grouped, NodeType.TIER),
        attributes=amounts,
    )


def build_transform_pipeline(context: ProcessingContext) -> ProcessingPipeline:
    return (
        ProcessingPipeline(context)
        .add(create_node_filter(is_item_node))
        .add(create_node_transformer(build_item))
    )


def transform_to_items(
    graph: ItemGraph, config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG
) -> list[Item]:
    """Build an ``Item`` for every item node, in graph order."""
    context = ProcessingContext(graph=graph, config=config)
    return build_transform_pipeline(context).execute()
