"""Tests for astarcraft.config.types module."""

from __future__ import annotations

import dataclasses
import math

import pytest

from astarcraft.config.constants import DEFAULT_TIME_BUDGET, WEIGHTED_PLACE_PROBABILITY
from astarcraft.config.types import RandomSearchConfig, SolverConfig, Strategy


class TestRandomSearchConfig:
    def test_defaults(self) -> None:
        config = RandomSearchConfig()
        assert config.time_budget == DEFAULT_TIME_BUDGET
        assert config.place_probability == WEIGHTED_PLACE_PROBABILITY
        assert config.restrict_through_cells is True

    def test_frozen(self) -> None:
        config = RandomSearchConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.time_budget = 2.0  # type: ignore[misc]

    def test_negative_budget_rejected(self) -> None:
        with pytest.raises(ValueError, match="time_budget"):
            RandomSearchConfig(time_budget=-0.1)

    @pytest.mark.parametrize("budget", [math.nan, math.inf])
    def test_non_finite_budget_rejected(self, budget: float) -> None:
        with pytest.raises(ValueError, match="time_budget must be a finite number"):
            RandomSearchConfig(time_budget=budget)

    @pytest.mark.parametrize("probability", [-0.01, 1.01])
    def test_probability_out_of_range_rejected(self, probability: float) -> None:
        with pytest.raises(ValueError, match="place_probability"):
            RandomSearchConfig(place_probability=probability)

    @pytest.mark.parametrize("probability", [0.0, 1.0])
    def test_probability_bounds_accepted(self, probability: float) -> None:
        assert RandomSearchConfig(place_probability=probability).place_probability == probability


class TestSolverConfig:
    def test_defaults(self) -> None:
        config = SolverConfig()
        assert config.strategy is Strategy.ALL
        assert config.search == RandomSearchConfig()
        assert config.seed is None

    def test_strategy_must_be_enum(self) -> None:
        with pytest.raises(ValueError, match="strategy"):
            SolverConfig(strategy="heuristic")  # type: ignore[arg-type]

    def test_negative_seed_rejected(self) -> None:
        with pytest.raises(ValueError, match="seed"):
            SolverConfig(seed=-1)

    def test_from_components(self) -> None:
        search = RandomSearchConfig(time_budget=0.1)
        config = SolverConfig.from_components(Strategy.RANDOM, search, seed=3)
        assert config.strategy is Strategy.RANDOM
        assert config.search is search
        assert config.seed == 3

    def test_from_components_default_search(self) -> None:
        assert SolverConfig.from_components().search == RandomSearchConfig()
