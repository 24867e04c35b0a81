"""itemforge: graph processing pipelines and exports for game-item data."""

__version__ = "0.1.0"
