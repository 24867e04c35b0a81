"""End-to-end export: optional randomization, node/link JSON and Markdown files."""

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..export.node_link import NodeLinkData, graph_to_node_link, write_node_link_js
from ..graph.store import ItemGraph
from ..processing.config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig
from ..processing.pipeline import ProcessingContext, ProcessingPipeline, Step
from ..processing.steps import create_conditional_processor, create_parallel_processor
from .markdown import MarkdownSink
from .policy import aggregate_items
from .randomize import build_randomize_pipeline

log = logging.getLogger(__name__)


@dataclass
class ExportResult:
    node_link: NodeLinkData
    js_file: Path | None
    markdown_files: list[Path]


def randomize_step(strategy: str) -> Step:
    def randomize(_data: Any, context: ProcessingContext) -> Any:
        return build_randomize_pipeline(context, strategy).execute()

    return randomize


def flatten_graph(_data: Any, context: ProcessingContext) -> NodeLinkData:
    return graph_to_node_link(context.graph)


def write_js_step(js_path: Path | None) -> Step:
    def write_js(rows: NodeLinkData, _context: ProcessingContext) -> Path | None:
        if js_path is None:
            return None
        return write_node_link_js(rows, js_path)

    return write_js


def markdown_step(output_dir: Path) -> Step:
    def write_markdown(rows: NodeLinkData, context: ProcessingContext) -> list[Path]:
        return aggregate_items(rows, finish=MarkdownSink(output_dir), config=context.config)

    return write_markdown


def _has_prng(_data: Any, context: ProcessingContext) -> bool:
    return context.prng is not None


def build_export_pipeline(
    context: ProcessingContext,
    output_dir: Path,
    js_path: Path | None = None,
    strategy: str = "bounded",
) -> ProcessingPipeline:
    """Randomize when the context has a prng, then write every export."""
    return (
        ProcessingPipeline(context)
        .add(create_conditional_processor(_has_prng, randomize_step(strategy)))
        .add(flatten_graph)
        .add(
            create_parallel_processor(
                [lambda rows, _context: rows, write_js_step(js_path), markdown_step(output_dir)],
                lambda results: ExportResult(*results),
            )
        )
    )


def export_items(
    graph: ItemGraph,
    output_dir: str | Path,
    *,
    js_path: str | Path | None = None,
    seed: int | None = None,
    strategy: str = "bounded",
    mappings: dict[str, dict[str, int | float | str]] | None = None,
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> ExportResult:
    """Export ``graph`` to Markdown (and optionally a JS viewer file).

    When ``seed`` is given the graph's items are randomized in place first.
    """
    context = ProcessingContext(
        graph=graph,
        prng=random.Random(seed) if seed is not None else None,
        mappings=mappings or {},
        config=config,
    )
    pipeline = build_export_pipeline(
        context,
        Path(output_dir),
        js_path=Path(js_path) if js_path is not None else None,
        strategy=strategy,
    )
    result = pipeline.execute()
    log.info(f"Exported {len(result.markdown_files)} items to {output_dir}")
    return result
