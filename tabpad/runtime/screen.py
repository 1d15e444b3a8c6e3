"""Frame composition for the command and switch views.

A ``Frame`` buffers draw primitives (move, clear, background, text) as ANSI
sequences and writes them in one call. Cell coordinates that do not fit the
terminal's 16-bit addressing are skipped instead of raising.
"""

from __future__ import annotations

import os
import re

from ..coords import Position, Size, shift
from ..state import EditorState, Mode

STATUS_BACKGROUND_COMMAND = "green"
STATUS_BACKGROUND_SWITCH = "blue"
SELECTION_BACKGROUND = "dark_grey"

BACKGROUND_SGR = {
    "green": "42",
    "blue": "44",
    "dark_grey": "100",
}

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def cell_text(text: str) -> str:
    """Map tabs and control characters to one visible cell each.

    Keeps one character per column so the on-screen cursor matches the
    Position arithmetic.
    """
    if _CONTROL_RE.search(text) is None:
        return text
    return _CONTROL_RE.sub(lambda match: " " if match.group(0) == "\t" else "?", text)


class Frame:
    """Ordered draw primitives flushed to the terminal in a single write."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def move_to(self, position: Position) -> bool:
        cell = position.to_cell()
        if cell is None:
            return False
        column, row = cell
        self.parts.append(f"\033[{row};{column}H")
        return True

    def clear_screen(self) -> None:
        self.parts.append("\033[H\033[2J")

    def clear_line(self) -> None:
        self.parts.append("\033[2K")

    def set_background(self, color: str) -> None:
        self.parts.append(f"\033[{BACKGROUND_SGR[color]}m")

    def reset_color(self) -> None:
        self.parts.append("\033[0m")

    def print(self, text: str) -> None:
        self.parts.append(text)

    def show_cursor(self, visible: bool) -> None:
        self.parts.append("\033[?25h" if visible else "\033[?25l")

    def text(self) -> str:
        return "".join(self.parts)

    def flush(self, fd: int) -> None:
        os.write(fd, self.text().encode("utf-8", errors="replace"))


def _status_bar(frame: Frame, size: Size, color: str, text: str) -> None:
    if not frame.move_to(Position(size.lines - 1, 0)):
        return
    frame.set_background(color)
    frame.clear_line()
    frame.print(cell_text(text)[: size.columns])
    frame.reset_color()


def _body_size(size: Size) -> Size:
    return Size(lines=max(1, size.lines - 1), columns=max(1, size.columns))


def render_command(frame: Frame, state: EditorState, size: Size) -> None:
    """Draw the current session's text window, status bar, and cursor."""
    body = _body_size(size)
    state.page_lines = body.lines
    session = state.current_session
    if session is None:
        _status_bar(frame, size, STATUS_BACKGROUND_COMMAND, state.status_message)
        frame.show_cursor(False)
        return

    absolute, relative = session.render(body)
    for row, line in enumerate(session.visible_lines(body)):
        if frame.move_to(Position(row, 0)):
            frame.print(cell_text(line))

    status = f"{session.label} {absolute.line + 1}:{absolute.column + 1}"
    status += f"  [{state.current + 1}/{len(state.sessions)}]"
    if session.modified:
        status += " *"
    if state.status_message:
        status += f"  {state.status_message}"
    _status_bar(frame, size, STATUS_BACKGROUND_COMMAND, status)

    if frame.move_to(relative):
        frame.show_cursor(True)
    else:
        frame.show_cursor(False)


def render_switch(frame: Frame, state: EditorState, size: Size) -> None:
    """Draw the filtered listing with the selected row highlighted."""
    body = _body_size(size)
    state.list_offset, _changed = shift(state.list_offset, Position(state.selected, 0), body)
    top = state.list_offset.line
    for row, path in enumerate(state.view[top : top + body.lines]):
        if frame.move_to(Position(row, 0)):
            frame.print(cell_text(path)[: body.columns])

    if 0 <= state.selected < len(state.view):
        if frame.move_to(Position(state.selected - top, 0)):
            frame.set_background(SELECTION_BACKGROUND)
            frame.clear_line()
            frame.print(cell_text(state.view[state.selected])[: body.columns])
            frame.reset_color()

    status = f"{state.path} {state.query}"
    status += f"  ({len(state.view)}/{len(state.paths)})"
    if state.show_hidden:
        status += " +hidden"
    if state.status_message:
        status += f"  {state.status_message}"
    _status_bar(frame, size, STATUS_BACKGROUND_SWITCH, status)
    frame.show_cursor(False)


MODE_RENDERERS = {
    Mode.COMMAND: render_command,
    Mode.SWITCH: render_switch,
}


def render_frame(state: EditorState, size: Size) -> Frame:
    frame = Frame()
    frame.reset_color()
    frame.clear_screen()
    MODE_RENDERERS[state.mode](frame, state, size)
    return frame


__all__ = [
    "BACKGROUND_SGR",
    "Frame",
    "MODE_RENDERERS",
    "cell_text",
    "render_command",
    "render_frame",
    "render_switch",
]
