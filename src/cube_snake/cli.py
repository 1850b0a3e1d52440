"""Command-line tools for the cube snake engine."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

import numpy as np

from cube_snake.config import GameConfig
from cube_snake.engine import CubeSnakeEngine
from cube_snake.topology import Direction, transition_table

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cube-snake",
        description="Cube snake simulation and topology tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless game with random inputs.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--ticks", type=int, default=500)
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--turn-chance", type=float, default=0.2,
        help="Probability of issuing a random direction each tick.",
    )

    # --- table ---
    table_p = sub.add_parser(
        "table", help="Print the face transition table as JSON.",
    )
    table_p.add_argument("--size", type=int, default=10)

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        config = dataclasses.replace(config, **overrides)

    engine = CubeSnakeEngine(config)
    inputs = np.random.default_rng(config.seed)
    directions = list(Direction)

    for _ in range(args.ticks):
        if inputs.random() < args.turn_chance:
            engine.set_direction(directions[int(inputs.integers(len(directions)))])
        engine.step()
        if engine.game_over:
            break

    logger.info(
        "Simulation finished after %d ticks (length %d).",
        engine.tick, len(engine.snake),
    )
    print(engine.status_text())  # noqa: T201
    return 0


def _run_table(args: argparse.Namespace) -> int:
    print(json.dumps(transition_table(args.size), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``cube-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "table": _run_table,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
