"""Command-line entry point for the terminal snake game."""

from __future__ import annotations

import argparse
import locale
import logging
import sys

from term_snake.app import GameApp
from term_snake.config import GameConfig
from term_snake.terminal import (
    CursesInput,
    CursesRenderer,
    display_size,
    terminal_session,
)

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description="Play Snake in the terminal.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON file with GameConfig overrides.",
    )
    parser.add_argument(
        "--save-config", type=str, default=None,
        help="Write the effective config as JSON to this path and exit.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for apple placement, for reproducible games.",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs here. The terminal is busy, so logs are "
             "discarded without this flag.",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=args.log_level,
            format=_LOG_FORMAT,
        )
    else:
        logging.basicConfig(
            level=args.log_level,
            handlers=[logging.NullHandler()],
        )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``term-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    config = GameConfig()
    if args.config:
        try:
            config = GameConfig.load(args.config)
        except (OSError, TypeError, ValueError) as exc:
            parser.error(f"invalid config {args.config}: {exc}")
        logger.info("Loaded config from %s", args.config)

    if args.save_config:
        try:
            config.save(args.save_config)
        except OSError as exc:
            logger.error("Could not save config: %s", exc)
            print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
            return 1
        return 0

    # Box-drawing and block glyphs need the user's locale for curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Unsupported locale; glyphs may render incorrectly.")

    try:
        with terminal_session() as screen:
            app = GameApp(
                CursesInput(screen),
                CursesRenderer(screen),
                lambda: display_size(screen),
                config=config,
                seed=args.seed,
            )
            app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130
    except OSError as exc:
        logger.error("Terminal failure: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
