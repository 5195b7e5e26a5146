"""Configuration dataclasses for the solver strategies.

All frozen dataclasses that parameterise randomized search and strategy
selection live here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from astarcraft.config.constants import DEFAULT_TIME_BUDGET, WEIGHTED_PLACE_PROBABILITY

__all__ = [
    "RandomSearchConfig",
    "SolverConfig",
    "Strategy",
]


class Strategy(Enum):
    """Which placement strategy the solver runs."""

    HEURISTIC = "heuristic"
    GREEDY = "greedy"
    RANDOM = "random"
    ALL = "all"


@dataclass(frozen=True)
class RandomSearchConfig:
    """Randomized-search knobs: wall-clock budget and per-cell sampling."""

    time_budget: float = DEFAULT_TIME_BUDGET
    place_probability: float = WEIGHTED_PLACE_PROBABILITY
    restrict_through_cells: bool = True

    def __post_init__(self) -> None:
        if not math.isfinite(self.time_budget) or self.time_budget < 0.0:
            raise ValueError(f"time_budget must be a finite number >= 0, got {self.time_budget!r}")
        if not 0.0 <= self.place_probability <= 1.0:
            raise ValueError("place_probability must be in [0.0, 1.0]")


@dataclass(frozen=True)
class SolverConfig:
    """Top-level solver settings."""

    strategy: Strategy = Strategy.ALL
    search: RandomSearchConfig = field(default_factory=RandomSearchConfig)
    seed: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.strategy, Strategy):
            raise ValueError("strategy must be a Strategy value")
        if self.seed is not None and self.seed < 0:
            raise ValueError("seed must be >= 0")

    @classmethod
    def from_components(
        cls,
        strategy: Strategy = Strategy.ALL,
        search: RandomSearchConfig | None = None,
        seed: int | None = None,
    ) -> SolverConfig:
        """Compose SolverConfig from a strategy and optional search sub-config."""
        return cls(strategy=strategy, search=search or RandomSearchConfig(), seed=seed)
