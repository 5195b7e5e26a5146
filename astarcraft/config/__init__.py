"""Configuration layer: constants and typed config dataclasses."""

from astarcraft.config.constants import (
    BLOCKED_SYMBOL,
    CELL_SYMBOLS,
    DEFAULT_TIME_BUDGET,
    DIRECTION_SYMBOLS,
    GRID_HEIGHT,
    GRID_WIDTH,
    NUM_DIRECTIONS,
    OPEN_SYMBOL,
    UNIFORM_PLACE_PROBABILITY,
    WEIGHTED_PLACE_PROBABILITY,
)
from astarcraft.config.types import RandomSearchConfig, SolverConfig, Strategy

__all__ = [
    "BLOCKED_SYMBOL",
    "CELL_SYMBOLS",
    "DEFAULT_TIME_BUDGET",
    "DIRECTION_SYMBOLS",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "NUM_DIRECTIONS",
    "OPEN_SYMBOL",
    "RandomSearchConfig",
    "SolverConfig",
    "Strategy",
    "UNIFORM_PLACE_PROBABILITY",
    "WEIGHTED_PLACE_PROBABILITY",
]
