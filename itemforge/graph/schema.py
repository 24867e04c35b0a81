"""Item graph schema definitions.

Defines the node types used for game items and the properties that modify
them, plus validation of node attribute maps.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class NodeType(Enum):
    """Valid node types in the item graph."""

    ITEM = "item"
    ATTRIBUTE = "attribute"
    TIER = "tier"
    SET = "set"
    SLOT = "slot"


# Node types that carry a single name onto the item they are linked from.
PROPERTY_TYPES = (NodeType.TIER, NodeType.SET, NodeType.SLOT)

ITEM_NUMERIC_FIELDS = ("weight", "value")
# Copied verbatim into item records and rendered as Markdown.
TEXT_FIELDS = ("description", "set", "slot", "tier")


@dataclass
class ValidationResult:
    """Result of a validation check."""

    valid: bool
    errors: list[str]
    warnings: list[str]

    def __bool__(self) -> bool:
        return self.valid


def validate_node_type(node_type: str) -> bool:
    """Check if a node type is valid."""
    return node_type in get_node_types()


def validate_node(attributes: dict[str, Any], strict: bool = False) -> ValidationResult:
    """Validate a node attribute map against the item schema.

    Args:
        attributes: Node attributes, including ``id`` and ``type``
        strict: If True, reject unknown types. If False, allow with warnings.

    Returns:
        ValidationResult with valid status and any errors/warnings
    """
    errors = []
    warnings = []
    node_id = attributes.get("id", "?")

    name = attributes.get("name")
    if not name:
        errors.append(f"Node {node_id} has no name")
    elif not isinstance(name, str):
        errors.append(f"Node {node_id} has non-text name: {name!r}")

    for field_name in TEXT_FIELDS:
        value = attributes.get(field_name)
        if value is not None and not isinstance(value, str):
            errors.append(f"Node {node_id} has non-text {field_name}: {value!r}")

    node_type = attributes.get("type")
    if not validate_node_type(node_type):
        msg = f"Unknown node type for {node_id}: {node_type}"
        if strict:
            errors.append(msg)
        else:
            warnings.append(msg)

    if node_type == NodeType.ITEM.value:
        for field_name in ITEM_NUMERIC_FIELDS:
            value = attributes.get(field_name)
            if value is None:
                warnings.append(f"Item {node_id} has no {field_name}")
            elif isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Item {node_id} has non-numeric {field_name}: {value!r}")

    return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)


def generate_node_id(name: str) -> str:
    """Generate a canonical node ID from a human-readable name.

    Example: "Main Hand" -> main_hand
    """
    normalized = name.lower().strip()
    normalized = normalized.replace(" ", "_").replace("-", "_")
    while "__" in normalized:
        normalized = normalized.replace("__", "_")
    return normalized.strip("_")


def get_node_types() -> list[str]:
    """Get list of all valid node types."""
    return [t.value for t in NodeType]
