"""Configuration for graph processing policies."""

from dataclasses import dataclass

DIRECTIONS = ("in", "out", "both")


@dataclass(frozen=True)
class ProcessingConfig:
    """Constants shared by fold, transform and randomization policies."""

    # Stand-in for an absent numeric attribute (edge amount, item weight/value).
    missing_number: float = 0
    base_multiplier: float = 1.0
    neighbor_direction: str = "out"

    def __post_init__(self) -> None:
        if self.neighbor_direction not in DIRECTIONS:
            raise ValueError(f"Invalid neighbor direction: {self.neighbor_direction}")

    def number_or_default(self, value) -> float:
        """Return ``value`` or the configured default when it is missing."""
        return self.missing_number if value is None else value


DEFAULT_PROCESSING_CONFIG = ProcessingConfig()
