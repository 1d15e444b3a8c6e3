"""Editor mode state machine.

``EditorController`` owns the open sessions and the file-picker state and
maps every key token or signal event onto one transition of the current mode.
Host-facing effects (terminal release on suspend, reacquire on resume) are
injected as callbacks so the machine stays testable without a terminal.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from functools import partial
from pathlib import Path

from .config import (
    EMPTY_CONFIRM_MESSAGE,
    EMPTY_CONFIRM_OPEN_QUERY,
    save_show_hidden,
)
from .coords import START, Position
from .input import KeyMap, command_keymap, is_query_character, switch_keymap
from .listing import collect_files, filter_paths, listing_changed
from .session import FileSession
from .state import EditorState, Mode

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.0

SIGNAL_QUIT = "quit"
SIGNAL_SUSPEND = "suspend"
SIGNAL_RESUME = "resume"


def _noop() -> None:
    return None


class EditorController:
    """Dispatch input events through the COMMAND/SWITCH transition tables."""

    def __init__(
        self,
        state: EditorState,
        *,
        command_keys: KeyMap | None = None,
        switch_keys: KeyMap | None = None,
        suspend_host: Callable[[], None] = _noop,
        resume_host: Callable[[], None] = _noop,
        persist_hidden: Callable[[bool], None] = save_show_hidden,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.command_keys = command_keys if command_keys is not None else command_keymap()
        self.switch_keys = switch_keys if switch_keys is not None else switch_keymap()
        self.suspend_host = suspend_host
        self.resume_host = resume_host
        self.persist_hidden = persist_hidden
        self.clock = clock
        self._command_handlers: dict[str, Callable[[], None]] = {
            "toggle_mode": self.enter_switch,
            "quit": self.quit,
            "suspend": self.suspend,
            "save": self.save,
            "save_all": self.save_all,
            "close": self.close,
            "next_file": partial(self.cycle, 1),
            "previous_file": partial(self.cycle, -1),
            "up": partial(self.move, "up"),
            "down": partial(self.move, "down"),
            "left": partial(self.move, "left"),
            "right": partial(self.move, "right"),
            "line_start": partial(self.move, "line_start"),
            "line_end": partial(self.move, "line_end"),
            "document_start": partial(self.move, "document_start"),
            "document_end": partial(self.move, "document_end"),
            "page_up": partial(self.page, -1),
            "page_down": partial(self.page, 1),
            "insert_newline": partial(self.edit, "insert_newline"),
            "delete_backward": partial(self.edit, "delete_backward"),
            "delete_forward": partial(self.edit, "delete_forward"),
        }
        self._switch_handlers: dict[str, Callable[[], None]] = {
            "toggle_mode": self.enter_command,
            "toggle_hidden": self.toggle_hidden,
            "select_up": partial(self.move_selection, -1),
            "select_down": partial(self.move_selection, 1),
            "query_backspace": self.query_backspace,
            "confirm": self.confirm,
        }
        self._mode_handlers: dict[Mode, Callable[[str], None]] = {
            Mode.COMMAND: self._handle_command_key,
            Mode.SWITCH: self._handle_switch_key,
        }
        self._signal_handlers: dict[str, Callable[[], None]] = {
            SIGNAL_QUIT: self.quit,
            SIGNAL_SUSPEND: self.suspend,
            SIGNAL_RESUME: self.resume,
        }

    # -- event entry points -------------------------------------------------

    def handle_key(self, key: str) -> None:
        """Apply one key token to the current mode."""
        self._mode_handlers[self.state.mode](key)

    def handle_signal(self, event: str) -> None:
        """Apply one signal event (``quit``, ``suspend``, ``resume``)."""
        logger.info("signal event: %s", event)
        self._signal_handlers[event]()

    def _handle_command_key(self, key: str) -> None:
        if self.command_keys.dispatch(key, self._command_handlers):
            self.state.dirty = True

    def _handle_switch_key(self, key: str) -> None:
        if self.switch_keys.dispatch(key, self._switch_handlers):
            self.state.dirty = True
            return
        if is_query_character(key):
            self.state.query += key
            self.apply_query()
            self.state.dirty = True

    # -- sessions ------------------------------------------------------------

    def _find_session(self, path: Path) -> int | None:
        target = path.resolve()
        for index, session in enumerate(self.state.sessions):
            if session.path.resolve() == target:
                return index
        return None

    def open(self, path: str | Path, create: bool = False) -> FileSession:
        """Open ``path`` (or focus it when already open) and enter COMMAND.

        Read failures propagate as ``OSError``.
        """
        state = self.state
        path = Path(path)
        existing = self._find_session(path)
        if existing is not None:
            state.current = existing
            session = state.sessions[existing]
        else:
            session = FileSession.open(path, create=create)
            state.sessions.append(session)
            state.current = len(state.sessions) - 1
        state.mode = Mode.COMMAND
        state.dirty = True
        return session

    def move(self, direction: str) -> None:
        session = self.state.current_session
        if session is not None:
            session.move(direction)

    def page(self, direction: int) -> None:
        session = self.state.current_session
        if session is None:
            return
        line = max(0, session.position.line + direction * self.state.page_lines)
        session.goto(Position(line, session.position.column))

    def edit(self, operation: str) -> None:
        session = self.state.current_session
        if session is None:
            return
        if operation == "insert_newline":
            session.insert("\n")
        elif operation == "delete_backward":
            session.delete_backward()
        elif operation == "delete_forward":
            session.delete_forward()

    def cycle(self, step: int) -> None:
        """Move the current index by ``step`` with wrap-around."""
        count = len(self.state.sessions)
        if count == 0:
            return
        self.state.current = (self.state.current + step) % count

    def save(self) -> None:
        session = self.state.current_session
        if session is None:
            return
        session.write()
        self.set_status(f"saved {session.label}")

    def save_all(self) -> None:
        for session in self.state.sessions:
            session.write()
        if self.state.sessions:
            self.set_status(f"saved {len(self.state.sessions)} file(s)")

    def close(self) -> None:
        """Write and drop the current session; focus moves to the previous one."""
        state = self.state
        session = state.current_session
        if session is None:
            return
        session.write()
        index = state.current
        del state.sessions[index]
        remaining = len(state.sessions)
        state.current = (index - 1) % remaining if remaining else 0
        logger.info("closed %s", session.path)

    def save_all_best_effort(self) -> None:
        for session in self.state.sessions:
            try:
                session.write()
            except OSError:
                logger.exception("could not save %s", session.path)

    # -- host lifecycle --------------------------------------------------------

    def quit(self) -> None:
        self.save_all_best_effort()
        self.state.run = False

    def suspend(self) -> None:
        self.suspend_host()

    def resume(self) -> None:
        self.resume_host()
        self.state.dirty = True

    # -- switch mode -----------------------------------------------------------

    def enter_switch(self) -> None:
        state = self.state
        state.mode = Mode.SWITCH
        self.rebuild_listing()
        state.query = ""
        self.apply_query()

    def enter_command(self) -> None:
        self.state.mode = Mode.COMMAND

    def rebuild_listing(self) -> None:
        state = self.state
        state.path = Path.cwd()
        state.listing = collect_files(state.path, state.show_hidden)
        logger.debug("listed %d files under %s", len(state.listing.paths), state.path)

    def apply_query(self) -> None:
        """Recompute the filtered view and reset selection to the top."""
        state = self.state
        state.view = filter_paths(state.paths, state.query)
        state.selected = 0
        state.list_offset = START

    def toggle_hidden(self) -> None:
        state = self.state
        state.show_hidden = not state.show_hidden
        self.persist_hidden(state.show_hidden)
        self.rebuild_listing()
        self.apply_query()

    def move_selection(self, step: int) -> None:
        state = self.state
        if not state.view:
            return
        state.selected = max(0, min(len(state.view) - 1, state.selected + step))

    def query_backspace(self) -> None:
        if not self.state.query:
            return
        self.state.query = self.state.query[:-1]
        self.apply_query()

    def confirm(self) -> None:
        """Open the selected entry, or apply the empty-confirm policy."""
        state = self.state
        if 0 <= state.selected < len(state.view):
            self.open(state.view[state.selected])
            return
        # EMPTY_CONFIRM_IGNORE leaves the picker as it is.
        policy = state.empty_confirm
        if policy == EMPTY_CONFIRM_OPEN_QUERY and state.query:
            self.open(state.query, create=True)
        elif policy == EMPTY_CONFIRM_MESSAGE:
            self.set_status(f"no file matches {state.query!r}")

    # -- idle work -------------------------------------------------------------

    def set_status(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def expire_status(self) -> None:
        state = self.state
        if state.status_message and self.clock() >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0
            state.dirty = True

    def poll(self) -> None:
        """Pick up external file and directory changes at most every poll interval."""
        state = self.state
        now = self.clock()
        if now - state.last_poll < state.poll_seconds:
            return
        state.last_poll = now
        for session in state.sessions:
            if session.refresh():
                self.set_status(f"reloaded {session.label}")
        if state.mode is Mode.SWITCH and state.listing is not None:
            if listing_changed(state.listing, Path.cwd()):
                selected = state.selected
                self.rebuild_listing()
                state.view = filter_paths(state.paths, state.query)
                state.selected = max(0, min(selected, len(state.view) - 1))
                state.dirty = True


__all__ = [
    "EditorController",
    "SIGNAL_QUIT",
    "SIGNAL_RESUME",
    "SIGNAL_SUSPEND",
    "STATUS_MESSAGE_SECONDS",
]
