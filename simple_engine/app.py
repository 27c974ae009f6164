"""Command-line entry point that opens a window and plays the demo level."""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from collections.abc import Sequence

from simple_engine.engine import Engine, EngineError
from simple_engine.game.game import Game


class _LevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        label = "Error" if record.levelno >= logging.ERROR else "Info"
        return f"[{label}] {record.getMessage()}"


def _configure_logging() -> None:
    """Informational messages to stdout, errors to stderr."""
    logger = logging.getLogger("simple_engine")
    if logger.handlers:
        return
    formatter = _LevelFormatter()

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(lambda record: record.levelno < logging.ERROR)
    out.setFormatter(formatter)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.ERROR)
    err.setFormatter(formatter)

    logger.addHandler(out)
    logger.addHandler(err)
    logger.setLevel(logging.INFO)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="simple-engine", description="Run the demo level.")
    parser.add_argument(
        "--assets",
        metavar="DIR",
        default=None,
        help="directory holding checker.ppm (default: $SIMPLE_ENGINE_ASSET_ROOT or ./assets)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game; returns 1 when the engine cannot start."""
    args = _parse_args(argv)
    _configure_logging()

    engine = Engine()
    game = Game(args.assets)
    try:
        engine.init()
    except EngineError:
        return 1

    try:
        with contextlib.suppress(EngineError):
            engine.run(game)
    finally:
        engine.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())