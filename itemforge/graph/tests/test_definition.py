"""Tests for YAML graph definition loading."""

import pytest

from itemforge.graph.definition import load_definition, load_sample_definition, parse_definition


def test_sample_definition_builds_sword_graph():
    """Test loading the bundled sword sample."""
    definition = load_sample_definition()
    graph = definition.graph

    stats = graph.get_stats()
    assert stats.nodes == 8
    assert stats.edges == 10
    assert stats.node_types["item"] == 2
    assert graph.out_neighbors("sword_1") == ["attack", "speed", "normal", "main_hand", "basic"]
    assert graph.get_edge_attribute("sword_2", "attack", "amount") == 10
    assert definition.mappings["tier"]["advanced"] == 1.0


def test_node_id_generated_from_name():
    """Test deriving a node id from its name."""
    definition = parse_definition(
        """
nodes:
  - {type: slot, name: Main Hand}
"""
    )
    assert definition.graph.nodes() == ["main_hand"]


def test_load_definition_from_file(tmp_path):
    """Test loading a definition from disk."""
    path = tmp_path / "graph.yaml"
    path.write_text("nodes:\n  - {id: a, type: tier, name: A}\n", encoding="utf-8")

    assert load_definition(path).graph.nodes() == ["a"]


def test_missing_file_raises():
    """Test that a missing definition file raises."""
    with pytest.raises(FileNotFoundError):
        load_definition("does/not/exist.yaml")


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just a list", "must be a mapping"),
        ("nodes:\n  - {id: a, type: weapon, name: A}", "Unknown node type"),
        ("nodes:\n  - {id: a, type: tier}", "has no name"),
        ("nodes:\n  - {id: a, type: item, name: A, weight: heavy, value: 1}", "non-numeric weight"),
        (
            "nodes:\n  - {id: a, type: tier, name: A}\n  - {id: a, type: tier, name: B}",
            "Duplicate node id",
        ),
        ("nodes:\n  - {id: a, type: tier, name: A}\nedges:\n  - {source: a, target: b}", "Unknown target"),
        (
            "nodes:\n  - {id: a, type: item, name: A, weight: 1, value: 1}\n"
            "  - {id: b, type: attribute, name: B}\n"
            "edges:\n  - {source: a, target: b, amount: lots}",
            "non-numeric amount",
        ),
        ("mappings:\n  tier: 3", "mappings must be"),
        ("mappings:\n  tier: {advanced: high}", "Mapping tier.advanced is not a number"),
        ("nodes:\n  - {id: a, type: tier, name: 3}", "non-text name"),
        ("nodes:\n  - {id: a, type: set, name: A, description: 5}", "non-text description"),
        ("nodes: [", "Invalid graph definition"),
    ],
)
def test_malformed_definitions_raise_value_error(text, message):
    """Test rejecting malformed definition documents."""
    with pytest.raises(ValueError, match=message):
        parse_definition(text)
