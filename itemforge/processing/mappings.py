"""Lookup-table helpers over the context's mapping tables."""

from typing import Iterable, Mapping

from .pipeline import ProcessingContext


def apply_mapping(
    name: str,
    key: str,
    context: ProcessingContext,
    default: int | float | str = 0,
) -> int | float | str:
    """Return ``context.mappings[name][key]`` or ``default`` when absent."""
    value = context.mappings.get(name, {}).get(key)
    return default if value is None else value


def calculate_value_factor(
    context: ProcessingContext,
    base: float = 0,
    mappings: Iterable[tuple[str, str] | tuple[str, str, float]] = (),
    custom_factors: Iterable[float] = (),
) -> float:
    """Sum ``base``, every mapped value and every custom factor.

    ``mappings`` entries are ``(table, key)`` or ``(table, key, default)``.
    """
    factor = base
    for entry in mappings:
        name, key, *rest = entry
        default = rest[0] if rest else 0
        factor += float(apply_mapping(name, key, context, default))
    for custom in custom_factors:
        factor += custom
    return factor


def sum_numeric_values(values: Mapping[str, float]) -> float:
    return sum(values.values(), 0)
