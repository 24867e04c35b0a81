"""Item graph storage, schema and definition loading."""

from .definition import GraphDefinition, load_definition, load_sample_definition, parse_definition
from .store import GraphStats, ItemGraph

__all__ = [
    "GraphDefinition",
    "GraphStats",
    "ItemGraph",
    "load_definition",
    "load_sample_definition",
    "parse_definition",
]
