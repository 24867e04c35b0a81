"""CLI for itemforge."""

import dataclasses
import json
import logging
from pathlib import Path

import click

from .graph.definition import GraphDefinition, load_definition, load_sample_definition
from .processing.config import ProcessingConfig
from .items.randomize import STRATEGIES, randomize_items
from .items.transform import transform_to_items
from .items.workflow import export_items

SAMPLE = "sample"


def _load(definition: str) -> GraphDefinition:
    """Load a YAML definition path, or the bundled sample for ``sample``."""
    try:
        if definition == SAMPLE:
            return load_sample_definition()
        return load_definition(definition)
    except (FileNotFoundError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--missing-default",
    type=float,
    default=0,
    help="Value used for missing amounts, weights and values",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, missing_default: float):
    """itemforge - process item graphs and export them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ProcessingConfig(missing_number=missing_default)


@cli.command()
@click.argument("definition", type=str)
def stats(definition: str):
    """Show node and edge counts of a graph definition."""
    click.echo(str(_load(definition).graph.get_stats()))


@cli.command()
@click.argument("definition", type=str)
@click.pass_obj
def items(config: ProcessingConfig, definition: str):
    """Print the items of a graph definition as JSON."""
    rows = [dataclasses.asdict(item) for item in transform_to_items(_load(definition).graph, config)]
    click.echo(json.dumps(rows, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("definition", type=str)
@click.option("--seed", type=int, required=True, help="PRNG seed")
@click.option("--strategy", type=click.Choice(STRATEGIES), default="bounded")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default="output/graph.json",
    help="Where to save the randomized graph JSON",
)
@click.pass_obj
def randomize(
    config: ProcessingConfig, definition: str, seed: int, strategy: str, output: Path
):
    """Randomize item amounts and values, then save the graph."""
    loaded = _load(definition)
    try:
        randomize_items(
            loaded.graph, seed, strategy=strategy, mappings=loaded.mappings, config=config
        )
    except (ValueError, LookupError) as exc:
        raise SystemExit(str(exc)) from exc
    loaded.graph.save(output)
    click.echo(f"Randomized graph saved to: {output.resolve()}")


@cli.command()
@click.argument("definition", type=str)
@click.option(
    "--out",
    "out_dir",
    type=click.Path(path_type=Path),
    default="output/md",
    help="Directory for the Markdown item files",
)
@click.option("--js", "js_path", type=click.Path(path_type=Path), default=None)
@click.option("--html", "html_path", type=click.Path(path_type=Path), default=None)
@click.option("--seed", type=int, default=None, help="Randomize items first")
@click.option("--strategy", type=click.Choice(STRATEGIES), default="bounded")
@click.pass_obj
def export(
    config: ProcessingConfig,
    definition: str,
    out_dir: Path,
    js_path: Path | None,
    html_path: Path | None,
    seed: int | None,
    strategy: str,
):
    """Export items as Markdown, optionally with a JS data file and HTML view."""
    loaded = _load(definition)
    try:
        result = export_items(
            loaded.graph,
            out_dir,
            js_path=js_path,
            seed=seed,
            strategy=strategy,
            mappings=loaded.mappings,
            config=config,
        )
    except (ValueError, LookupError) as exc:
        raise SystemExit(str(exc)) from exc

    click.echo(f"Markdown files: {len(result.markdown_files)} in {out_dir}")
    if result.js_file:
        click.echo(f"Graph data: {result.js_file}")

    if html_path:
        from .graph.visualize import create_web_visualization

        click.echo(f"Visualization: {create_web_visualization(loaded.graph, html_path)}")


if __name__ == "__main__":
    cli()
