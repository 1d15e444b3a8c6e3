"""Main interactive event loop for the editor.

Each iteration drains pending signal events, renders when state is dirty,
then waits a bounded time for one key. Idle timeouts drive change polling.
This loop is wiring only; transitions live in ``EditorController``.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from ..controller import EditorController
from ..coords import Size
from ..input import read_key
from .screen import render_frame
from .signals import SignalEvents
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 200


def run_main_loop(
    controller: EditorController,
    terminal: TerminalController,
    events: SignalEvents,
    stdin_fd: int,
    stdout_fd: int,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run until a quit key or quit signal clears ``state.run``.

    The terminal is held in raw mode for the whole run and released on every
    exit path, including exceptions raised by file operations.
    """
    state = controller.state
    last_size: Size | None = None

    with terminal.raw_mode():
        while state.run:
            for event in events.drain():
                controller.handle_signal(event)
                if not state.run:
                    break
            if not state.run:
                break

            term = shutil.get_terminal_size((80, 24))
            size = Size.from_terminal(max(1, term.columns), max(1, term.lines))
            if size != last_size:
                last_size = size
                state.dirty = True
            controller.expire_status()

            if state.dirty:
                render_frame(state, size).flush(stdout_fd)
                state.dirty = False

            key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            if key == "":
                controller.poll()
                continue
            controller.handle_key(key)


__all__ = ["RuntimeLoopTiming", "run_main_loop"]
