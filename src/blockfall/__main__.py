"""Command line entry point.

Run with: ``python -m blockfall``

The default ``text`` front-end plays a short scripted session on a logical
clock and prints the resulting frame, useful as a smoke test that renderers see
more than a blank grid.  ``--frontend pygame`` opens a playable window.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .game import GameChange, GameView, MenuView
from .runner import GameRunner
from .settings import GRAVITY_MS, HEIGHT, WIDTH, Settings
from .utils import format_grid


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__.splitlines()[0])
    parser.add_argument("--cols", type=int, default=WIDTH, help="field width in cells")
    parser.add_argument("--rows", type=int, default=HEIGHT, help="field height in cells")
    parser.add_argument(
        "--delay", type=float, default=GRAVITY_MS, help="gravity delay in milliseconds"
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece bag")
    parser.add_argument("--frontend", choices=("text", "pygame"), default="text")
    parser.add_argument(
        "--frames",
        type=int,
        default=5,
        help="gravity periods to simulate with the text front-end",
    )
    parser.add_argument("--log-file", default="blockfall.log", help="log destination")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
    )
    return parser.parse_args(argv)


def configure_logging(path: str, level: str) -> None:
    logging.basicConfig(
        filename=path,
        level=getattr(logging, level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


class LogicalClock:
    """Clock that only moves when told to."""

    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def render_text(change: Optional[GameChange]) -> str:
    """Return a printable rendering of a game or menu snapshot."""

    if isinstance(change, MenuView):
        return "\n".join(
            ("> " if i == change.selected else "  ") + label
            for i, (label, _) in enumerate(change.items)
        )
    if isinstance(change, GameView):
        return f"{format_grid(change.main)}\nScore: {change.score}"
    return ""


def run_text(settings: Settings, frames: int, seed: Optional[int] = None) -> str:
    """Play ``frames`` gravity periods on a logical clock and return the last frame."""

    clock = LogicalClock()
    runner = GameRunner(settings, clock, seed=seed)
    last = runner.step()
    for _ in range(frames):
        clock.advance(settings.delay)
        change = runner.step()
        if isinstance(change, (GameView, MenuView)):
            last = change
    return render_text(last)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    settings = Settings(cols=args.cols, rows=args.rows, delay=args.delay)
    LOGGER.info("Starting %s front-end with %s", args.frontend, settings)
    if args.frontend == "pygame":
        from .run_pygame import main as run_pygame

        run_pygame(settings, seed=args.seed)
    else:
        print(run_text(settings, args.frames, seed=args.seed))


if __name__ == "__main__":
    main()
