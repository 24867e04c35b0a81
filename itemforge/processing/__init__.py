"""Composable graph processing: pipeline, step factories and neighbor grouping."""

from .config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig
from .mappings import apply_mapping, calculate_value_factor, sum_numeric_values
from .neighbors import get_connected_nodes, get_edge_amounts, group_connected_nodes_by_type
from .pipeline import ProcessingContext, ProcessingPipeline, Step
from .steps import (
    create_batch_processor,
    create_conditional_processor,
    create_edge_attribute_updater,
    create_filter,
    create_grouper,
    create_mapper,
    create_node_attribute_updater,
    create_node_filter,
    create_node_transformer,
    create_parallel_processor,
    create_reducer,
    create_sorter,
)

__all__ = [
    "DEFAULT_PROCESSING_CONFIG",
    "ProcessingConfig",
    "ProcessingContext",
    "ProcessingPipeline",
    "Step",
    "apply_mapping",
    "calculate_value_factor",
    "create_batch_processor",
    "create_conditional_processor",
    "create_edge_attribute_updater",
    "create_filter",
    "create_grouper",
    "create_mapper",
    "create_node_attribute_updater",
    "create_node_filter",
    "create_node_transformer",
    "create_parallel_processor",
    "create_reducer",
    "create_sorter",
    "get_connected_nodes",
    "get_edge_amounts",
    "group_connected_nodes_by_type",
    "sum_numeric_values",
]
