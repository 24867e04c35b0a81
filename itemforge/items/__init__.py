"""Game-item policy built on the processing core."""

from .markdown import MarkdownSink, render_item_markdown
from .policy import aggregate_items, collect_items, fold_item_link, populate_item_from_node
from .randomize import ItemPlan, randomize_items
from .transform import transform_to_items
from .types import Item
from .workflow import ExportResult, export_items

__all__ = [
    "ExportResult",
    "Item",
    "ItemPlan",
    "MarkdownSink",
    "aggregate_items",
    "collect_items",
    "export_items",
    "fold_item_link",
    "populate_item_from_node",
    "randomize_items",
    "render_item_markdown",
    "transform_to_items",
]
