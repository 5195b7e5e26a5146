"""Monte-Carlo marker search under a wall-clock budget.

Every iteration samples one placement over all open cells, scores it, and
keeps the best seen so far. The loop checks the deadline only after an
evaluation, so at least one candidate always exists.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from astarcraft.config.constants import NUM_DIRECTIONS
from astarcraft.config.types import RandomSearchConfig
from astarcraft.domain.agent import Agent
from astarcraft.domain.geometry import CLOCKWISE_ORDER
from astarcraft.domain.grid import Grid
from astarcraft.domain.placement import Candidate, Marker, Placement
from astarcraft.simulation.engine import score

logger = logging.getLogger(__name__)

RANDOM_LABEL = "random"
THROUGH_CELL_BLOCKED = 1

RngLike = np.random.Generator | int | None


@dataclass(frozen=True)
class SearchResult:
    """Best candidate plus loop telemetry."""

    candidate: Candidate
    iterations: int
    elapsed: float


def as_generator(rng: RngLike) -> np.random.Generator:
    """Accept a ready ``Generator``, an int seed, or ``None`` (fresh entropy)."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


class PlacementSampler:
    """Vectorized per-cell marker sampler for one grid.

    Direction choices are precomputed once: every open cell draws uniformly
    from all 4 headings, except through-cells (one blocked neighbor) when
    ``restrict_through_cells`` is set, which draw from their 3 open exits.
    """

    def __init__(
        self, grid: Grid, *, place_probability: float, restrict_through_cells: bool
    ) -> None:
        self.positions = grid.open_cells()
        self.place_probability = place_probability
        n_cells = len(self.positions)
        self._choices = np.tile(np.arange(NUM_DIRECTIONS, dtype=np.int8), (n_cells, 1))
        self._n_choices = np.full(n_cells, NUM_DIRECTIONS, dtype=np.int64)
        if restrict_through_cells:
            for i, pos in enumerate(self.positions):
                if grid.neighbor_blocked_count(pos) != THROUGH_CELL_BLOCKED:
                    continue
                exits = [
                    d.index
                    for d in CLOCKWISE_ORDER
                    if not grid.is_blocked(pos.moved(d, grid.width, grid.height))
                ]
                self._choices[i, : len(exits)] = exits
                self._n_choices[i] = len(exits)

    def sample(self, rng: np.random.Generator) -> Placement:
        n_cells = len(self.positions)
        if n_cells == 0:
            return Placement()
        placed = rng.random(n_cells) < self.place_probability
        picks = (rng.random(n_cells) * self._n_choices).astype(np.intp)
        directions = self._choices[np.arange(n_cells), picks]
        return Placement(
            Marker(self.positions[i], CLOCKWISE_ORDER[int(directions[i])])
            for i in np.flatnonzero(placed)
        )


def sample_placement(
    grid: Grid,
    rng: RngLike,
    *,
    place_probability: float,
    restrict_through_cells: bool,
) -> Placement:
    """Draw one random placement over the open cells of ``grid``."""
    sampler = PlacementSampler(
        grid,
        place_probability=place_probability,
        restrict_through_cells=restrict_through_cells,
    )
    return sampler.sample(as_generator(rng))


def random_search(
    grid: Grid,
    agents: Sequence[Agent],
    config: RandomSearchConfig | None = None,
    *,
    rng: RngLike = None,
    clock: Callable[[], float] = time.perf_counter,
) -> SearchResult:
    """Sample and score placements until ``config.time_budget`` seconds elapse.

    Keeps the strictly highest score; the first placement reaching it wins.
    """
    config = config or RandomSearchConfig()
    generator = as_generator(rng)
    sampler = PlacementSampler(
        grid,
        place_probability=config.place_probability,
        restrict_through_cells=config.restrict_through_cells,
    )

    start = clock()
    best: Candidate | None = None
    iterations = 0
    while True:
        placement = sampler.sample(generator)
        total = score(grid.apply(placement), agents)
        iterations += 1
        if best is None or total > best.score:
            best = Candidate(placement, total, RANDOM_LABEL)
        elapsed = clock() - start
        if elapsed >= config.time_budget:
            break

    logger.info(
        "random search: %d iterations in %.3fs, best score %d", iterations, elapsed, best.score
    )
    return SearchResult(candidate=best, iterations=iterations, elapsed=elapsed)
