"""CLI entrypoint: read a problem, run the solver, print the marker line.

The result line is the only thing written to stdout; scores, iteration counts
and grid dumps go to the logging side channel on stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from astarcraft.config.constants import (
    DEFAULT_TIME_BUDGET,
    GRID_HEIGHT,
    GRID_WIDTH,
    UNIFORM_PLACE_PROBABILITY,
    WEIGHTED_PLACE_PROBABILITY,
)
from astarcraft.config.types import RandomSearchConfig, SolverConfig, Strategy
from astarcraft.errors import MalformedInputError
from astarcraft.io.output import format_placement, log_grid
from astarcraft.io.parsing import Problem, parse_problem, read_problem
from astarcraft.solvers.strategy import solve

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# ---------------------------------------------------------------------------
# Value coercion helpers
# ---------------------------------------------------------------------------

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _parse_strategy(raw_strategy: str) -> Strategy:
    """Map a strategy name to ``Strategy``."""
    try:
        return Strategy(raw_strategy)
    except ValueError as exc:
        valid = ", ".join(s.value for s in Strategy)
        raise ValueError(f"strategy must be one of {valid}") from exc


def _coerce_bool(raw: object, key: str) -> bool:
    """Accept JSON booleans and on/off style words."""
    if isinstance(raw, bool):
        return raw
    word = raw.strip().lower() if isinstance(raw, str) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_optional_int(raw: object, key: str) -> int | None:
    """Seeds and board dimensions: ``None`` passes through, whole floats are accepted."""
    if raw is None:
        return None
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, (int, str)) and not isinstance(raw, bool):
        return int(raw)
    raise ValueError(f"{key} must be an integer value, got {raw!r}")


def _coerce_float(raw: object, key: str) -> float:
    """Budgets and probabilities; booleans are rejected."""
    if isinstance(raw, (int, float, str)) and not isinstance(raw, bool):
        return float(raw)
    raise ValueError(f"{key} must be a number, got {raw!r}")


def _coerce_str(raw: object, key: str) -> str:
    if isinstance(raw, str):
        return raw
    raise ValueError(f"{key} must be a string, got {raw!r}")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """Command line first, then the config file, then ``default``."""
    return cli_val if cli_val is not None else file_cfg.get(key, default)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Place arrows on a toroidal grid to maximize robot survival"
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Problem file (defaults to stdin)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in Strategy],
        default=None,
    )
    parser.add_argument("--time-budget", type=float, default=None, help="Seconds")
    parser.add_argument(
        "--place-probability",
        type=float,
        default=None,
        help=f"Per-cell marker probability ({UNIFORM_PLACE_PROBABILITY} gives the plain sampler)",
    )
    parser.add_argument(
        "--restrict-through-cells", action=argparse.BooleanOptionalAction, default=None
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument(
        "--render",
        type=Path,
        default=None,
        help="Write a PNG of the solved grid to this path",
    )
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    return parser


def _load_problem(input_path: Path | None, width: int, height: int) -> Problem:
    if input_path is None:
        return read_problem(sys.stdin, width=width, height=height)
    text = input_path.read_text(encoding="utf-8")
    return parse_problem(text.splitlines(), width=width, height=height)


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        log_level = _coerce_str(
            _get_val(args.log_level, "log_level", file_cfg, "WARNING"), "log_level"
        ).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        strategy = _parse_strategy(
            _coerce_str(
                _get_val(args.strategy, "strategy", file_cfg, Strategy.ALL.value), "strategy"
            )
        )
        search = RandomSearchConfig(
            time_budget=_coerce_float(
                _get_val(args.time_budget, "time_budget", file_cfg, DEFAULT_TIME_BUDGET),
                "time_budget",
            ),
            place_probability=_coerce_float(
                _get_val(
                    args.place_probability,
                    "place_probability",
                    file_cfg,
                    WEIGHTED_PLACE_PROBABILITY,
                ),
                "place_probability",
            ),
            restrict_through_cells=_coerce_bool(
                _get_val(args.restrict_through_cells, "restrict_through_cells", file_cfg, True),
                "restrict_through_cells",
            ),
        )
        seed = _coerce_optional_int(_get_val(args.seed, "seed", file_cfg, None), "seed")
        width = _coerce_optional_int(_get_val(args.width, "width", file_cfg, GRID_WIDTH), "width")
        height = _coerce_optional_int(
            _get_val(args.height, "height", file_cfg, GRID_HEIGHT), "height"
        )
        if width is None or height is None or width < 1 or height < 1:
            raise ValueError("width and height must be >= 1")
        config = SolverConfig(strategy=strategy, search=search, seed=seed)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        stream=sys.stderr,
        level=log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        problem = _load_problem(args.input, width, height)
    except FileNotFoundError:
        parser.error(f"Input file not found: {args.input}")
    except MalformedInputError as exc:
        parser.error(f"Malformed input: {exc}")
    except UnicodeDecodeError as exc:
        parser.error(f"Input is not valid UTF-8 text: {exc}")

    log_grid(problem.grid)
    best = solve(problem.grid, problem.agents, config)
    output = format_placement(best.placement)
    logger.debug("%s", output)

    if args.render is not None:
        from astarcraft.viz.render import render_grid

        render_grid(
            problem.grid.apply(best.placement),
            args.render,
            agents=problem.agents,
            title=f"{best.label}: score {best.score}",
        )
        logger.info("rendered solution to %s", args.render)

    print(output)


if __name__ == "__main__":
    main()
