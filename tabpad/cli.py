"""Command-line front door for tabpad.

Parses CLI options, configures file logging, and dispatches into the
interactive editor runtime. Fatal runtime errors leave with a non-zero exit
status after the terminal has been restored.
"""

from __future__ import annotations

import argparse
import logging

from .config import EMPTY_CONFIRM_POLICIES
from .logs import LOG_LEVELS, configure_logging
from .runtime import run_editor

logger = logging.getLogger(__name__)


def _log_level(value: str) -> str:
    """argparse type for logging level names."""
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r} (choose from {', '.join(LOG_LEVELS)})")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabpad",
        description="Browse, filter, and edit several text files in one terminal session.",
    )
    parser.add_argument("paths", nargs="*", metavar="FILE", help="Files to open at startup, in order.")
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        default=None,
        help="List dotfiles in the file picker (default: saved preference).",
    )
    parser.add_argument(
        "--empty-confirm",
        choices=EMPTY_CONFIRM_POLICIES,
        default=None,
        help="What Enter does in the picker when nothing matches (default: config or open-query).",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default="WARNING",
        help=f"File log verbosity ({', '.join(LOG_LEVELS)}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the editor on the given files."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        run_editor(args.paths, show_hidden=args.show_hidden, empty_confirm=args.empty_confirm)
    except OSError as exc:
        logger.exception("fatal file error")
        raise SystemExit(f"tabpad: {exc}") from exc


if __name__ == "__main__":
    main()
