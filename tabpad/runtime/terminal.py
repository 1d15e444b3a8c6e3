"""Terminal control helpers for the editor session.

Owns raw-mode lifecycle and alternate-screen switching. The controller is the
single handle on process-wide terminal state: every path that hands the
terminal back to the host (suspend, exit, error) goes through
``disable_tui_mode``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_SEQUENCE = b"\x1b[0m\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw/alternate-screen mode transitions for one run."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SEQUENCE)
        self.active = True

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and the saved tty attributes."""
        os.write(self.stdout_fd, LEAVE_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.active = False

    def release(self) -> None:
        """Hand the terminal back to the host if it is currently held."""
        if self.active:
            self.disable_tui_mode()

    def reacquire(self) -> None:
        """Re-enter TUI mode; also re-applies it after an external stop."""
        self.enable_tui_mode()

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.release()
