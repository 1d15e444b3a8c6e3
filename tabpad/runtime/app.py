"""Runtime composition layer for tabpad.

Checks for a terminal, builds the initial state from config and CLI options,
pre-opens files, wires terminal and signal hooks into the controller, and
starts the loop.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from ..config import load_empty_confirm_policy, load_poll_seconds, load_show_hidden
from ..controller import EditorController
from ..state import EditorState
from .loop import run_main_loop
from .signals import SignalEvents, stop_self
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def require_tty() -> None:
    """Exit with a diagnostic unless stdin and stdout are terminals."""
    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        raise SystemExit("tabpad requires an interactive terminal (no TTY attached)")


def build_state(show_hidden: bool | None = None, empty_confirm: str | None = None) -> EditorState:
    """Create initial editor state; explicit options win over persisted config."""
    return EditorState(
        path=Path.cwd(),
        show_hidden=load_show_hidden() if show_hidden is None else show_hidden,
        empty_confirm=load_empty_confirm_policy() if empty_confirm is None else empty_confirm,
        poll_seconds=load_poll_seconds(),
    )


def run_editor(
    paths: Sequence[str],
    show_hidden: bool | None = None,
    empty_confirm: str | None = None,
) -> None:
    """Launch the interactive editor with ``paths`` pre-opened in order.

    An unreadable path aborts before the terminal is switched to raw mode.
    """
    require_tty()
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    def suspend_host() -> None:
        terminal.release()
        logger.info("suspending")
        stop_self()

    state = build_state(show_hidden=show_hidden, empty_confirm=empty_confirm)
    controller = EditorController(
        state,
        suspend_host=suspend_host,
        resume_host=terminal.reacquire,
    )
    for path in paths:
        try:
            controller.open(path)
        except OSError as exc:
            raise SystemExit(f"Cannot open {path}: {exc}") from exc

    events = SignalEvents()
    with events.installed():
        run_main_loop(controller, terminal, events, stdin_fd, stdout_fd)
    logger.info("exited with %d open file(s)", len(state.sessions))


__all__ = ["build_state", "require_tty", "run_editor"]
