"""Tests for neighbor lookup and grouping."""

import pytest

from itemforge.graph.store import ItemGraph
from itemforge.processing.neighbors import (
    get_connected_nodes,
    get_edge_amounts,
    group_connected_nodes_by_type,
)


@pytest.fixture
def graph():
    g = ItemGraph()
    g.add_node("sword", type="item", name="Sword")
    g.add_node("attack", type="attribute", name="Attack")
    g.add_node("speed", type="attribute", name="Speed")
    g.add_node("normal", type="tier", name="Normal")
    g.add_node("mystery", name="Mystery")
    g.add_node("blank", type="", name="Blank")
    g.add_node("smith", type="crafter", name="Smith")
    g.add_edge("sword", "attack", amount=5)
    g.add_edge("sword", "normal")
    g.add_edge("sword", "speed", amount=1)
    g.add_edge("sword", "mystery")
    g.add_edge("sword", "blank")
    g.add_edge("smith", "sword")
    return g


def test_connected_nodes_by_direction(graph):
    """Test neighbor records for each direction."""
    assert [n["id"] for n in get_connected_nodes(graph, "sword")] == [
        "attack",
        "normal",
        "speed",
        "mystery",
        "blank",
    ]
    assert [n["id"] for n in get_connected_nodes(graph, "sword", "in")] == ["smith"]
    assert [n["id"] for n in get_connected_nodes(graph, "sword", "both")] == [
        "attack",
        "normal",
        "speed",
        "mystery",
        "blank",
        "smith",
    ]


def test_connected_nodes_are_snapshots(graph):
    """Test that neighbor records are copies."""
    records = get_connected_nodes(graph, "sword")
    records[0]["name"] = "Changed"

    assert graph.get_node_attribute("attack", "name") == "Attack"

    graph.set_node_attribute("attack", "name", "Power")
    assert records[0]["name"] == "Changed"
    assert get_connected_nodes(graph, "sword")[0]["name"] == "Power"


def test_invalid_direction_raises(graph):
    """Test rejecting an unknown direction."""
    with pytest.raises(ValueError):
        get_connected_nodes(graph, "sword", "up")


def test_grouping_is_exhaustive_and_disjoint(graph):
    """Test that grouping places every neighbor exactly once."""
    grouped = group_connected_nodes_by_type(graph, "sword", "both")

    ids = [n["id"] for group in grouped.values() for n in group]
    assert sorted(ids) == sorted(graph.neighbors("sword"))
    assert len(ids) == len(set(ids))
    for key, group in grouped.items():
        for node in group:
            assert key == (node.get("type") or "unknown")


def test_grouping_keeps_neighbor_order_and_unknown_bucket(graph):
    """Test group order and the bucket for untyped nodes."""
    grouped = group_connected_nodes_by_type(graph, "sword")

    assert [n["id"] for n in grouped["attribute"]] == ["attack", "speed"]
    assert [n["id"] for n in grouped["tier"]] == ["normal"]
    assert [n["id"] for n in grouped["unknown"]] == ["mystery", "blank"]
    assert "crafter" not in grouped


def test_grouping_node_without_neighbors(graph):
    """Test grouping a node with no neighbors."""
    assert group_connected_nodes_by_type(graph, "attack") == {}


def test_edge_amounts_with_default(graph):
    """Test reading edge amounts with a fallback."""
    grouped = group_connected_nodes_by_type(graph, "sword")

    assert get_edge_amounts(graph, "sword", grouped["attribute"]) == {"attack": 5, "speed": 1}
    assert get_edge_amounts(graph, "sword", grouped["tier"], default=1) == {"normal": 1}
