"""Tests for the click command line."""

import json

from click.testing import CliRunner

from itemforge.cli import cli


def test_stats_sample():
    """Test the stats command on the sample."""
    result = CliRunner().invoke(cli, ["stats", "sample"])

    assert result.exit_code == 0
    assert "8" in result.output
    assert "10" in result.output


def test_items_sample_as_json():
    """Test printing the sample items as JSON."""
    result = CliRunner().invoke(cli, ["items", "sample"])

    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert [row["id"] for row in rows] == ["sword_1", "sword_2"]
    assert rows[1]["tier"] == "Advanced"
    assert rows[1]["attributes"] == {"attack": 10, "speed": 2}


def test_export_sample(tmp_path):
    """Test exporting the sample."""
    out_dir = tmp_path / "md"
    js_path = tmp_path / "graph.js"

    result = CliRunner().invoke(
        cli, ["export", "sample", "--out", str(out_dir), "--js", str(js_path)]
    )

    assert result.exit_code == 0
    assert "Markdown files: 2" in result.output
    assert (out_dir / "Basic" / "Sword I.md").exists()
    assert js_path.exists()


def test_randomize_saves_graph(tmp_path):
    """Test saving a randomized graph."""
    output = tmp_path / "graph.json"

    result = CliRunner().invoke(
        cli, ["randomize", "sample", "--seed", "3", "--strategy", "simple", "-o", str(output)]
    )

    assert result.exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 8


def test_missing_definition_fails(tmp_path):
    """Test a definition path that does not exist."""
    result = CliRunner().invoke(cli, ["stats", str(tmp_path / "nope.yaml")])

    assert result.exit_code != 0


def test_bad_mapping_table_fails_cleanly(tmp_path):
    """A non-numeric mapping value is reported instead of crashing."""
    path = tmp_path / "graph.yaml"
    path.write_text(
        "nodes:\n  - {id: t, type: tier, name: T}\nmappings:\n  tier: {t: high}\n",
        encoding="utf-8",
    )

    for args in (["randomize", str(path), "--seed", "1", "-o", str(tmp_path / "g.json")],
                 ["export", str(path), "--seed", "1", "--out", str(tmp_path / "md")]):
        result = CliRunner().invoke(cli, args)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Mapping tier.t is not a number" in result.output


def test_numeric_name_fails_cleanly(tmp_path):
    """A tier named with a number is rejected when the definition loads."""
    path = tmp_path / "graph.yaml"
    path.write_text(
        "nodes:\n"
        "  - {id: sword, type: item, name: Sword, weight: 1, value: 1}\n"
        "  - {id: t, type: tier, name: 3}\n"
        "edges:\n  - {source: sword, target: t}\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli, ["export", str(path), "--out", str(tmp_path / "md")])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "non-text name" in result.output


def test_randomize_value_error_becomes_exit(tmp_path, monkeypatch):
    """Errors raised while randomizing exit with their message."""

    def fail(*_args, **_kwargs):
        raise ValueError("cannot randomize")

    monkeypatch.setattr("itemforge.cli.randomize_items", fail)

    result = CliRunner().invoke(
        cli, ["randomize", "sample", "--seed", "1", "-o", str(tmp_path / "g.json")]
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "cannot randomize" in result.output


def test_export_missing_source_becomes_exit(tmp_path):
    """A link from a non-item node stops the export with a message."""
    path = tmp_path / "graph.yaml"
    path.write_text(
        "nodes:\n"
        "  - {id: speed, type: attribute, name: Speed}\n"
        "  - {id: sword, type: item, name: Sword, weight: 1, value: 1}\n"
        "edges:\n  - {source: speed, target: sword}\n",
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli, ["export", str(path), "--out", str(tmp_path / "md")])

    assert result.exit_code == 1
    assert "No node found for speed => sword" in result.output
