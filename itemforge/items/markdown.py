"""Markdown rendering and file sink for item records."""

import logging
import re
from pathlib import Path

from .types import Item

log = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def _tag(value: str) -> str:
    return "#" + _WHITESPACE.sub("_", value).lower()


def _number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _attribute_label(attribute_id: str) -> str:
    return attribute_id[:1].upper() + attribute_id[1:]


def _attributes_section(attributes: dict[str, float]) -> list[str]:
    if not attributes:
        return ["None"]
    rows = [
        f"| {_attribute_label(name)} | {_number(amount)} |"
        for name, amount in attributes.items()
    ]
    return ["| Attribute | Value |", "| ----- | ----- |", *rows]


def render_item_markdown(item: Item) -> str:
    """Render one item as a Markdown document."""
    tags = " ".join([_tag(item.tier), _tag(item.slot), _tag(item.set), "#item"])
    parts = [
        f"# {item.name}",
        tags,
        "",
        "## Description",
        item.description,
        "",
        "## Tier",
        item.tier,
        "",
        "## Slot",
        item.slot,
        "",
        "## Set",
        item.set,
        "",
        "## Configurations",
        "| Option | Value |",
        "| ------ | ----- |",
        f"| Weight | {_number(item.weight)} |",
        f"| Value | {_number(item.value)} |",
        "",
        "## Attributes",
        *_attributes_section(item.attributes),
    ]
    return "\n".join(parts) + "\n"


def item_markdown_path(output_dir: Path, item: Item) -> Path:
    """``<output_dir>/<set>/<name>.md``"""
    return Path(output_dir) / item.set / f"{item.name}.md"


class MarkdownSink:
    """Writes one Markdown file per finished item record."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def __call__(self, items: dict[str, Item]) -> list[Path]:
        written = []
        for item in items.values():
            path = item_markdown_path(self.output_dir, item)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_item_markdown(item), encoding="utf-8")
            log.info(f"Generated: {path}")
            written.append(path)
        return written
