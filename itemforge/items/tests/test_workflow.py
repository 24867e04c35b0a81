"""Tests for the end-to-end export workflow."""

import json

import pytest

from itemforge.errors import MissingSourceNodeError
from itemforge.graph.definition import load_sample_definition
from itemforge.graph.store import ItemGraph
from itemforge.items.workflow import export_items


@pytest.fixture
def sample():
    return load_sample_definition()


def test_export_writes_markdown_per_item(sample, tmp_path):
    """Test the Markdown files written by an export."""
    result = export_items(sample.graph, tmp_path / "md")

    assert result.markdown_files == [
        tmp_path / "md" / "Basic" / "Sword I.md",
        tmp_path / "md" / "Basic" / "Sword II.md",
    ]
    text = result.markdown_files[1].read_text(encoding="utf-8")
    assert text.startswith("# Sword II\n#advanced #main_hand #basic #item\n")
    assert "| Attack | 10 |" in text
    assert result.js_file is None


def test_export_without_seed_leaves_graph_unchanged(sample, tmp_path):
    """Test that exporting without a seed is read-only."""
    before = sample.graph.to_node_link()

    result = export_items(sample.graph, tmp_path)

    assert result.node_link == before
    assert sample.graph.to_node_link() == before


def test_export_writes_js_data(sample, tmp_path):
    """Test the viewer data file written by an export."""
    js_path = tmp_path / "web" / "graph.js"

    result = export_items(sample.graph, tmp_path / "md", js_path=js_path)

    assert result.js_file == js_path
    content = js_path.read_text(encoding="utf-8")
    assert content.startswith("const graph=")
    assert json.loads(content[len("const graph="):]) == result.node_link


def test_export_with_seed_randomizes_first(tmp_path):
    """Test that a seeded export randomizes before writing."""
    first = load_sample_definition()
    second = load_sample_definition()

    result = export_items(first.graph, tmp_path / "a", seed=99, mappings=first.mappings)
    export_items(second.graph, tmp_path / "b", seed=99, mappings=second.mappings)

    assert result.node_link == first.graph.to_node_link()
    assert first.graph.to_node_link() == second.graph.to_node_link()
    assert first.graph.get_node_attribute("sword_2", "value") != 10


def test_export_propagates_missing_source(tmp_path):
    """Test that a bad link source aborts the export."""
    graph = ItemGraph()
    graph.add_node("speed", type="attribute", name="Speed")
    graph.add_node("sword", type="item", name="Sword")
    graph.add_edge("speed", "sword")

    with pytest.raises(MissingSourceNodeError):
        export_items(graph, tmp_path)
