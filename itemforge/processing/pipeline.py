"""Processing context and sequential step pipeline."""

import logging
import random
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Iterable

from ..graph.store import ItemGraph
from .config import DEFAULT_PROCESSING_CONFIG, ProcessingConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingContext:
    """State shared by every step of one pipeline.

    ``graph`` is shared by reference and may be mutated by steps. Any keyed
    data without a dedicated field goes into ``extras``.
    """

    graph: ItemGraph
    prng: random.Random | None = None
    mappings: dict[str, dict[str, int | float | str]] = field(default_factory=dict)
    config: ProcessingConfig = DEFAULT_PROCESSING_CONFIG
    extras: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a named field or, failing that, an extras entry."""
        if key in _CONTEXT_FIELDS:
            return getattr(self, key)
        return self.extras.get(key, default)

    def merged(self, **updates: Any) -> "ProcessingContext":
        """Return a copy with ``updates`` applied; top-level keys, last write wins."""
        known = {k: v for k, v in updates.items() if k in _CONTEXT_FIELDS}
        unknown = {k: v for k, v in updates.items() if k not in _CONTEXT_FIELDS}
        if unknown:
            known["extras"] = {**known.get("extras", self.extras), **unknown}
        return replace(self, **known)


_CONTEXT_FIELDS = frozenset(f.name for f in fields(ProcessingContext))

# A step maps (input, context) to an output. Consecutive steps are not
# checked for compatible input/output types.
Step = Callable[[Any, ProcessingContext], Any]


def _step_name(step: Step) -> str:
    return getattr(step, "__name__", type(step).__name__)


class ProcessingPipeline:
    """Runs steps in insertion order, feeding each output to the next step."""

    def __init__(self, context: ProcessingContext, steps: Iterable[Step] = ()):
        self._context = context
        self._steps: list[Step] = list(steps)

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    def add(self, step: Step) -> "ProcessingPipeline":
        """Append a step; returns the pipeline for chaining."""
        self._steps.append(step)
        return self

    def execute(self, initial_input: Any = None) -> Any:
        """Run every step once. An empty pipeline returns its input.

        Exceptions raised by a step propagate immediately; later steps do
        not run and graph mutations already made are kept.
        """
        data = initial_input
        for index, step in enumerate(self._steps):
            log.debug(f"Running step {index}: {_step_name(step)}")
            data = step(data, self._context)
        return data

    def execute_many(self, inputs: Iterable[Any]) -> list[Any]:
        """Run the whole pipeline independently on each input, keeping order."""
        return [self.execute(item) for item in inputs]

    def get_context(self) -> ProcessingContext:
        return self._context

    def update_context(self, **updates: Any) -> "ProcessingPipeline":
        """Merge ``updates`` into the context without mutating the old one."""
        self._context = self._context.merged(**updates)
        return self
