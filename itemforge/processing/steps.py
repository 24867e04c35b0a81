"""Reusable step factories for processing pipelines.

Every factory returns a closure ``(input, context) -> output``. Factories
hold no shared state, so the steps they build can be reused across
pipelines.
"""

import functools
from typing import Any, Callable, Sequence, TypeVar

from .neighbors import NeighborRecord, group_connected_nodes_by_type
from .pipeline import ProcessingContext, Step

T = TypeVar("T")
R = TypeVar("R")

NodePredicate = Callable[[str, dict], bool]
NodeRef = str | Callable[[ProcessingContext], str]


def _resolve(ref: NodeRef, context: ProcessingContext) -> str:
    return ref(context) if callable(ref) else ref


# Graph steps


def create_node_filter(predicate: NodePredicate) -> Step:
    """Select ids of nodes matching ``predicate(node_id, attributes)``.

    The step ignores its input; ids come back in graph order.
    """

    def node_filter(_input: Any, context: ProcessingContext) -> list[str]:
        return context.graph.filter_nodes(predicate)

    return node_filter


def create_node_transformer(
    transform: Callable[
        [str, dict, dict[str, list[NeighborRecord]], ProcessingContext], R
    ],
    direction: str | None = None,
) -> Step:
    """Map a list of node ids to ``transform(id, attributes, grouped, context)``.

    ``grouped`` holds the node's neighbors grouped by type, looked up in
    ``direction`` (defaults to the context config's direction).
    """

    def node_transformer(node_ids: list[str], context: ProcessingContext) -> list[R]:
        graph = context.graph
        lookup = direction or context.config.neighbor_direction
        results = []
        for node_id in node_ids:
            attributes = graph.get_node_attributes(node_id)
            grouped = group_connected_nodes_by_type(graph, node_id, lookup)
            results.append(transform(node_id, attributes, grouped, context))
        return results

    return node_transformer


def create_batch_processor(
    predicate: NodePredicate,
    action: Callable[[str, ProcessingContext], None],
) -> Step:
    """Run ``action(node_id, context)`` on every matching node, in graph order."""

    def batch_processor(_input: Any, context: ProcessingContext) -> None:
        for node_id in context.graph.filter_nodes(predicate):
            action(node_id, context)

    return batch_processor


def create_edge_attribute_updater(
    source: NodeRef,
    target: NodeRef,
    attribute: str,
    update: Callable[[Any, ProcessingContext], Any],
) -> Step:
    """Replace an edge attribute with ``update(current, context)``."""

    def edge_attribute_updater(_input: Any, context: ProcessingContext) -> None:
        context.graph.update_directed_edge_attribute(
            _resolve(source, context),
            _resolve(target, context),
            attribute,
            lambda value: update(value, context),
        )

    return edge_attribute_updater


def create_node_attribute_updater(
    node: NodeRef,
    attribute: str,
    update: Callable[[Any, ProcessingContext], Any],
) -> Step:
    """Replace a node attribute with ``update(current, context)``."""

    def node_attribute_updater(_input: Any, context: ProcessingContext) -> None:
        context.graph.update_node_attribute(
            _resolve(node, context),
            attribute,
            lambda value: update(value, context),
        )

    return node_attribute_updater


# Collection steps


def create_filter(predicate: Callable[[T, int], bool]) -> Step:
    def filter_step(items: list[T], _context: ProcessingContext) -> list[T]:
        return [item for index, item in enumerate(items) if predicate(item, index)]

    return filter_step


def create_mapper(mapper: Callable[[T, int], R]) -> Step:
    def map_step(items: list[T], _context: ProcessingContext) -> list[R]:
        return [mapper(item, index) for index, item in enumerate(items)]

    return map_step


def create_reducer(reducer: Callable[[R, T, int], R], initial: R) -> Step:
    """Left fold starting from ``initial``."""

    def reduce_step(items: list[T], _context: ProcessingContext) -> R:
        accumulator = initial
        for index, item in enumerate(items):
            accumulator = reducer(accumulator, item, index)
        return accumulator

    return reduce_step


def create_grouper(key: Callable[[T], str]) -> Step:
    def group_step(items: list[T], _context: ProcessingContext) -> dict[str, list[T]]:
        groups: dict[str, list[T]] = {}
        for item in items:
            groups.setdefault(key(item), []).append(item)
        return groups

    return group_step


def create_sorter(
    key: Callable[[T], Any] | None = None,
    compare: Callable[[T, T], int] | None = None,
    reverse: bool = False,
) -> Step:
    """Stable sort by ``key`` or by a three-way ``compare`` function."""
    if key is not None and compare is not None:
        raise ValueError("Pass either key or compare, not both")
    sort_key = functools.cmp_to_key(compare) if compare is not None else key

    def sort_step(items: list[T], _context: ProcessingContext) -> list[T]:
        return sorted(items, key=sort_key, reverse=reverse)

    return sort_step


# Control flow


def create_conditional_processor(
    condition: Callable[[Any, ProcessingContext], bool],
    then_step: Step,
    else_step: Step | None = None,
) -> Step:
    """Delegate to ``then_step`` or ``else_step``; pass the input through otherwise."""

    def conditional(data: Any, context: ProcessingContext) -> Any:
        if condition(data, context):
            return then_step(data, context)
        if else_step is not None:
            return else_step(data, context)
        return data

    return conditional


def create_parallel_processor(
    steps: Sequence[Step],
    combine: Callable[[list[Any]], R],
) -> Step:
    """Feed the same input to every step and combine their outputs positionally."""

    def parallel(data: Any, context: ProcessingContext) -> R:
        return combine([step(data, context) for step in steps])

    return parallel
