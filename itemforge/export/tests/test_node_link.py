"""Tests for node/link flattening."""

import json

from itemforge.export.node_link import graph_to_node_link, write_node_link_js
from itemforge.graph.store import ItemGraph


def test_graph_to_node_link_mirrors_store_order():
    """Test flattening nodes and links in store order."""
    graph = ItemGraph()
    graph.add_node("b", type="attribute", name="B")
    graph.add_node("a", type="item", name="A", weight=1)
    graph.add_edge("a", "b", amount=3)

    data = graph_to_node_link(graph)

    assert [n["id"] for n in data["nodes"]] == ["b", "a"]
    assert data["nodes"][1] == {"id": "a", "type": "item", "name": "A", "weight": 1}
    assert data["links"] == [{"source": "a", "target": "b", "amount": 3}]
    json.dumps(data)


def test_write_node_link_js(tmp_path):
    """Test writing the viewer data file."""
    data = {"nodes": [{"id": "a"}], "links": []}

    path = write_node_link_js(data, tmp_path / "generated" / "items.js")

    text = path.read_text(encoding="utf-8")
    assert text.startswith("const graph=")
    assert json.loads(text[len("const graph="):]) == data
