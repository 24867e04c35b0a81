"""Seeded randomization of item attribute amounts and values.

Two strategies are available:

* ``simple``: one batch step. Each attribute amount becomes
  ``ceil(amount * multiplier * (1 + rand))`` and the item value becomes
  ``ceil(value * multiplier * attribute_sum)``.
* ``bounded``: a multi-step pipeline. Each amount is capped by an integer
  drawn from ``[amount, base_sum * multiplier + 1]``, where ``base_sum`` is
  the item's attribute total before randomization.

The multiplier is ``config.base_multiplier`` plus the mapping-table entries
for the item's first tier, set and slot neighbors.
"""

import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Any

from ..graph.schema import PROPERTY_TYPES, NodeType
from ..graph.store import ItemGraph
from ..processing.config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig
from ..processing.mappings import calculate_value_factor, sum_numeric_values
from ..processing.neighbors import (
    NeighborRecord,
    get_edge_amounts,
    group_connected_nodes_by_type,
)
from ..processing.pipeline import ProcessingContext, ProcessingPipeline, Step
from ..processing.steps import (
    create_batch_processor,
    create_edge_attribute_updater,
    create_node_attribute_updater,
    create_node_filter,
    create_node_transformer,
)
from .transform import is_item_node

log = logging.getLogger(__name__)

STRATEGIES = ("simple", "bounded")


@dataclass(frozen=True)
class ItemPlan:
    """Randomization state for one item, refined step by step."""

    node_id: str
    name: str
    multiplier: float
    attribute_base_sum: float = 0
    randomized_attributes: dict[str, int] = field(default_factory=dict)
    attribute_sum: float = 0
    old_value: float = 0
    new_value: float = 0


def _require_prng(context: ProcessingContext) -> random.Random:
    if context.prng is None:
        raise ValueError("Randomization needs a seeded prng in the processing context")
    return context.prng


def item_multiplier(
    grouped: dict[str, list[NeighborRecord]], context: ProcessingContext
) -> float:
    """Base multiplier plus the mapped bonus of the first tier, set and slot."""
    lookups = [
        (prop.value, grouped[prop.value][0]["id"])
        for prop in PROPERTY_TYPES
        if grouped.get(prop.value)
    ]
    return calculate_value_factor(
        context, base=context.config.base_multiplier, mappings=lookups
    )


def _attribute_amounts(node_id: str, context: ProcessingContext) -> dict[str, float]:
    grouped = group_connected_nodes_by_type(
        context.graph, node_id, context.config.neighbor_direction
    )
    return get_edge_amounts(
        context.graph,
        node_id,
        grouped.get(NodeType.ATTRIBUTE.value, []),
        default=context.config.missing_number,
    )


# Simple strategy


def randomize_item(node_id: str, context: ProcessingContext) -> None:
    """Randomize one item's attribute amounts and value in place."""
    graph = context.graph
    prng = _require_prng(context)
    grouped = group_connected_nodes_by_type(
        graph, node_id, context.config.neighbor_direction
    )
    multiplier = item_multiplier(grouped, context)
    name = graph.get_node_attribute(node_id, "name", node_id)
    log.info(f"Processing {name}: multiplier {multiplier}")

    amounts = get_edge_amounts(
        graph,
        node_id,
        grouped.get(NodeType.ATTRIBUTE.value, []),
        default=context.config.missing_number,
    )

    attribute_sum = 0
    for attribute_id, amount in amounts.items():
        randomized = math.ceil(amount * multiplier * (1 + prng.random()))
        graph.update_directed_edge_attribute(
            node_id, attribute_id, "amount", lambda _current: randomized
        )
        attribute_sum += randomized
        log.debug(f"  {attribute_id}: {amount} -> {randomized}")

    base_value = context.config.number_or_default(graph.get_node_attribute(node_id, "value"))
    new_value = math.ceil(base_value * multiplier * attribute_sum)
    graph.update_node_attribute(node_id, "value", lambda _current: new_value)
    log.info(f"  value: {base_value} -> {new_value} (attribute sum: {attribute_sum})")


def build_simple_pipeline(context: ProcessingContext) -> ProcessingPipeline:
    return ProcessingPipeline(context).add(
        create_batch_processor(is_item_node, randomize_item)
    )


# Bounded strategy


def plan_item(
    node_id: str,
    attributes: dict[str, Any],
    grouped: dict[str, list[NeighborRecord]],
    context: ProcessingContext,
) -> ItemPlan:
    multiplier = item_multiplier(grouped, context)
    log.debug(f"Multiplier for {attributes.get('name', node_id)}: {multiplier}")
    return ItemPlan(
        node_id=node_id,
        name=attributes.get("name", node_id),
        multiplier=multiplier,
    )


def calculate_attribute_base_sums(
    plans: list[ItemPlan], context: ProcessingContext
) -> list[ItemPlan]:
    return [
        replace(
            plan,
            attribute_base_sum=sum_numeric_values(_attribute_amounts(plan.node_id, context)),
        )
        for plan in plans
    ]


def randomize_attributes(
    plans: list[ItemPlan], context: ProcessingContext
) -> list[ItemPlan]:
    prng = _require_prng(context)
    results = []
    for plan in plans:
        randomized: dict[str, int] = {}
        for attribute_id, amount in _attribute_amounts(plan.node_id, context).items():
            min_value = math.ceil(amount * plan.multiplier * (1 + prng.random()))
            max_bound = plan.attribute_base_sum * plan.multiplier + 1
            low = math.ceil(amount)
            drawn = prng.randint(low, max(low, math.floor(max_bound)))
            randomized[attribute_id] = min(min_value, drawn)
            log.debug(
                f"  {plan.name} {attribute_id}: {amount} -> {randomized[attribute_id]} "
                f"(min: {min_value}, max: {max_bound})"
            )
        results.append(
            replace(
                plan,
                randomized_attributes=randomized,
                attribute_sum=sum_numeric_values(randomized),
            )
        )
    return results


def calculate_item_values(
    plans: list[ItemPlan], context: ProcessingContext
) -> list[ItemPlan]:
    results = []
    for plan in plans:
        old_value = context.config.number_or_default(
            context.graph.get_node_attribute(plan.node_id, "value")
        )
        new_value = math.ceil(old_value * plan.multiplier * plan.attribute_sum)
        log.info(f"{plan.name}: value {old_value} -> {new_value}")
        results.append(replace(plan, old_value=old_value, new_value=new_value))
    return results


def _replace_with(value: Any):
    return lambda _current, _context: value


def apply_changes_to_graph(
    plans: list[ItemPlan], context: ProcessingContext
) -> list[ItemPlan]:
    for plan in plans:
        updates: list[Step] = [
            create_edge_attribute_updater(
                plan.node_id, attribute_id, "amount", _replace_with(amount)
            )
            for attribute_id, amount in plan.randomized_attributes.items()
        ]
        updates.append(
            create_node_attribute_updater(plan.node_id, "value", _replace_with(plan.new_value))
        )
        for update in updates:
            update(None, context)
    log.info(f"Applied randomized values to {len(plans)} items")
    return plans


def build_bounded_pipeline(context: ProcessingContext) -> ProcessingPipeline:
    return (
        ProcessingPipeline(context)
        .add(create_node_filter(is_item_node))
        .add(create_node_transformer(plan_item))
        .add(calculate_attribute_base_sums)
        .add(randomize_attributes)
        .add(calculate_item_values)
        .add(apply_changes_to_graph)
    )


def build_randomize_pipeline(
    context: ProcessingContext, strategy: str = "bounded"
) -> ProcessingPipeline:
    if strategy == "simple":
        return build_simple_pipeline(context)
    if strategy == "bounded":
        return build_bounded_pipeline(context)
    raise ValueError(f"Unknown strategy {strategy!r}, expected one of {STRATEGIES}")


def randomize_items(
    graph: ItemGraph,
    seed: int,
    strategy: str = "bounded",
    mappings: dict[str, dict[str, int | float | str]] | None = None,
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> list[ItemPlan] | None:
    """Randomize every item in ``graph`` in place with a PRNG seeded by ``seed``.

    Returns the item plans for the bounded strategy and None for the
    simple one.
    """
    context = ProcessingContext(
        graph=graph,
        prng=random.Random(seed),
        mappings=mappings or {},
        config=config,
    )
    log.info(f"Randomizing items with seed {seed} ({strategy})")
    return build_randomize_pipeline(context, strategy).execute()
