"""Strategy dispatch: run the configured solvers and keep the best candidate."""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Sequence

from astarcraft.config.types import SolverConfig, Strategy
from astarcraft.domain.agent import Agent
from astarcraft.domain.grid import Grid
from astarcraft.domain.placement import Candidate
from astarcraft.solvers.greedy import best_greedy
from astarcraft.solvers.heuristics import best_heuristic
from astarcraft.solvers.random_search import RngLike, random_search

logger = logging.getLogger(__name__)


def solve(
    grid: Grid,
    agents: Sequence[Agent],
    config: SolverConfig | None = None,
    *,
    rng: RngLike = None,
    clock: Callable[[], float] = time.perf_counter,
) -> Candidate:
    """Return the best candidate produced by ``config.strategy``.

    ``Strategy.ALL`` runs heuristic, greedy and random search in that order;
    the random search gets whatever remains of the time budget. Earlier
    strategies win ties.
    """
    config = config or SolverConfig()
    if rng is None:
        rng = config.seed
    start = clock()
    strategy = config.strategy
    candidates: list[Candidate] = []

    if strategy in (Strategy.HEURISTIC, Strategy.ALL):
        candidates.append(best_heuristic(grid, agents))
    if strategy in (Strategy.GREEDY, Strategy.ALL):
        candidates.append(best_greedy(grid, agents))
    if strategy in (Strategy.RANDOM, Strategy.ALL):
        remaining = max(0.0, config.search.time_budget - (clock() - start))
        search_config = dataclasses.replace(config.search, time_budget=remaining)
        result = random_search(grid, agents, search_config, rng=rng, clock=clock)
        candidates.append(result.candidate)

    best = candidates[0]
    for candidate in candidates:
        logger.debug("candidate %s scored %d", candidate.label, candidate.score)
        if candidate.score > best.score:
            best = candidate
    logger.info(
        "selected %s: score %d with %d markers", best.label, best.score, len(best.placement)
    )
    return best
