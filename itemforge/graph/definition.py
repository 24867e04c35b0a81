"""YAML graph definition loader.

A definition document looks like::

    nodes:
      - {id: sword_1, type: item, name: Sword I, weight: 1, value: 5}
      - {id: attack, type: attribute, name: Attack}
    edges:
      - {source: sword_1, target: attack, amount: 5}
    mappings:
      tier: {advanced: 1.0, normal: 0}
"""

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from .schema import generate_node_id, validate_node
from .store import ItemGraph

log = logging.getLogger(__name__)

SAMPLE_DEFINITION = "swords.yaml"


@dataclass
class GraphDefinition:
    """A loaded graph plus the lookup tables shipped alongside it."""

    graph: ItemGraph
    mappings: dict[str, dict[str, int | float | str]] = field(default_factory=dict)


def parse_definition(text: str) -> GraphDefinition:
    """Parse a YAML definition document into a graph."""
    try:
        document = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid graph definition: {exc}") from exc

    if not isinstance(document, dict):
        raise ValueError("Graph definition must be a mapping")

    graph = ItemGraph()

    for raw in document.get("nodes") or []:
        if not isinstance(raw, dict):
            raise ValueError(f"Node entry must be a mapping: {raw!r}")
        attributes = dict(raw)
        node_id = attributes.pop("id", None) or generate_node_id(str(attributes.get("name", "")))
        if not node_id:
            raise ValueError(f"Node entry has neither id nor name: {raw!r}")
        if graph.has_node(node_id):
            raise ValueError(f"Duplicate node id: {node_id}")

        result = validate_node({"id": node_id, **attributes}, strict=True)
        if not result:
            raise ValueError("; ".join(result.errors))
        for warning in result.warnings:
            log.warning(warning)

        graph.add_node(node_id, **attributes)

    for raw in document.get("edges") or []:
        if not isinstance(raw, dict) or "source" not in raw or "target" not in raw:
            raise ValueError(f"Edge entry needs source and target: {raw!r}")
        attributes = dict(raw)
        source = attributes.pop("source")
        target = attributes.pop("target")
        amount = attributes.get("amount")
        if amount is not None and (
            isinstance(amount, bool) or not isinstance(amount, (int, float))
        ):
            raise ValueError(f"Edge {source} -> {target} has non-numeric amount: {amount!r}")
        graph.add_edge(source, target, **attributes)

    mappings = document.get("mappings") or {}
    if not isinstance(mappings, dict) or not all(
        isinstance(table, dict) for table in mappings.values()
    ):
        raise ValueError("mappings must be a mapping of name -> {key: value}")
    for name, table in mappings.items():
        for key, value in table.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Mapping {name}.{key} is not a number: {value!r}")

    stats = graph.get_stats()
    log.debug(f"Loaded graph definition: {stats.nodes} nodes, {stats.edges} edges")
    return GraphDefinition(graph=graph, mappings=mappings)


def load_definition(path: str | Path) -> GraphDefinition:
    """Load a YAML definition file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Graph definition not found: {path}")
    return parse_definition(path.read_text(encoding="utf-8"))


def load_sample_definition() -> GraphDefinition:
    """Load the bundled two-sword sample graph."""
    text = resources.files("itemforge.data").joinpath(SAMPLE_DEFINITION).read_text(
        encoding="utf-8"
    )
    return parse_definition(text)
