"""Command line entry point.

Run with: `python -m blockfall`

By default a pygame window opens.  ``--ascii`` instead prints a single frame
composed of the board plus the active piece, useful as a minimal smoke test
that runs without a display.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from .board import HEIGHT, WIDTH
from .config import POINTS_PER_LINE, TICK_INTERVAL_MS, GameConfig
from .controller import GameController
from .utils import format_grid, render_grid


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle game.")
    parser.add_argument("--cols", type=int, default=WIDTH, help="Board width in cells.")
    parser.add_argument("--rows", type=int, default=HEIGHT, help="Board height in cells.")
    parser.add_argument(
        "--tick-ms",
        type=float,
        default=TICK_INTERVAL_MS,
        help="Milliseconds between gravity steps.",
    )
    parser.add_argument(
        "--points-per-line",
        type=int,
        default=POINTS_PER_LINE,
        help="Points awarded for each cleared row.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the shape sequence.")
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print the opening frame as text and exit instead of opening a window.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        cols=args.cols,
        rows=args.rows,
        tick_interval_ms=args.tick_ms,
        points_per_line=args.points_per_line,
        seed=args.seed,
    )


def ascii_frame(config: GameConfig) -> str:
    """Start a game and return its first frame as text."""

    controller = GameController(config)
    controller.start()
    state = controller.state
    return format_grid(render_grid(state.board, state.active))


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s"
    )
    config = config_from_args(args)
    if args.ascii:
        print(ascii_frame(config))
        return

    # Imported lazily so the text mode works without a display.
    from .run_pygame import main as run_window

    run_window(config)


if __name__ == "__main__":
    main()
