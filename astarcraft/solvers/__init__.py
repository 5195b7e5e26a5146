"""Solvers layer: heuristics, greedy detours, randomized search and dispatch."""

from astarcraft.solvers.greedy import best_greedy, greedy_fill
from astarcraft.solvers.heuristics import CORNER_TABLE, best_heuristic, fill
from astarcraft.solvers.random_search import (
    PlacementSampler,
    SearchResult,
    random_search,
    sample_placement,
)
from astarcraft.solvers.strategy import solve

__all__ = [
    "CORNER_TABLE",
    "PlacementSampler",
    "SearchResult",
    "best_greedy",
    "best_heuristic",
    "fill",
    "greedy_fill",
    "random_search",
    "sample_placement",
    "solve",
]
