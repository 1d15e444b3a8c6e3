"""Process-signal funnel for the single-threaded event loop.

Handlers do nothing but append an event name to a deque; the loop drains it
between key reads, so signal-driven transitions run in the same serialized
order as key presses.
"""

from __future__ import annotations

import contextlib
import os
import signal
from collections import deque

from ..controller import SIGNAL_QUIT, SIGNAL_RESUME, SIGNAL_SUSPEND

SIGNAL_EVENTS: dict[int, str] = {
    signal.SIGINT: SIGNAL_QUIT,
    signal.SIGTERM: SIGNAL_QUIT,
    signal.SIGQUIT: SIGNAL_QUIT,
    signal.SIGTSTP: SIGNAL_SUSPEND,
    signal.SIGCONT: SIGNAL_RESUME,
}


class SignalEvents:
    """Pending signal events in arrival order."""

    def __init__(self) -> None:
        self._pending: deque[str] = deque()

    def _handle(self, signum: int, _frame) -> None:
        self._pending.append(SIGNAL_EVENTS[signum])

    def push(self, event: str) -> None:
        self._pending.append(event)

    def drain(self) -> list[str]:
        """Pop and return every pending event, oldest first."""
        events: list[str] = []
        while self._pending:
            events.append(self._pending.popleft())
        return events

    @contextlib.contextmanager
    def installed(self):
        """Route the handled signals here, restoring prior handlers on exit."""
        previous = {signum: signal.signal(signum, self._handle) for signum in SIGNAL_EVENTS}
        try:
            yield self
        finally:
            for signum, handler in previous.items():
                signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def stop_self() -> None:
    """Stop this process until the host sends ``SIGCONT``."""
    os.kill(os.getpid(), signal.SIGSTOP)


__all__ = ["SIGNAL_EVENTS", "SignalEvents", "stop_self"]
