"""Open-file buffers with cursor, viewport, and change detection.

A ``FileSession`` owns one file's text, its cursor and scroll offset, and the
modification stamp observed at the last read or write. The controller polls
``refresh`` to pick up external edits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import navigation
from .coords import EOL, START, Position, Size, next_position, shift

logger = logging.getLogger(__name__)

READ_ENCODING = "utf-8"
FALLBACK_ENCODING = "latin-1"
CRLF = "\r\n"


def read_text(path: Path) -> tuple[str, str, str]:
    """Read ``path`` as UTF-8, falling back to latin-1 for undecodable bytes.

    Returns ``(text, encoding, newline)``. ``CRLF`` line endings are folded to
    ``"\\n"`` in ``text`` and reported as ``newline`` so ``write`` can restore
    them; the encoding is reused when writing back.
    """
    try:
        with open(path, encoding=READ_ENCODING, newline="") as handle:
            raw, encoding = handle.read(), READ_ENCODING
    except UnicodeDecodeError:
        with open(path, encoding=FALLBACK_ENCODING, newline="") as handle:
            raw, encoding = handle.read(), FALLBACK_ENCODING
    if CRLF in raw:
        return raw.replace(CRLF, EOL), encoding, CRLF
    return raw, encoding, EOL


def modified_stamp(path: Path) -> int:
    """Return the on-disk modification time of ``path`` in nanoseconds."""
    return path.stat().st_mtime_ns


class FileSession:
    """One open file: text, cursor, scroll offset, and on-disk stamp."""

    def __init__(
        self,
        path: Path,
        content: str = "",
        last_modified: int | None = None,
        encoding: str = READ_ENCODING,
        newline: str = EOL,
    ) -> None:
        self.path = path
        self.content = content
        self.last_modified = last_modified
        self.encoding = encoding
        self.newline = newline
        self.position = START
        self.offset = START
        self.modified = False

    @classmethod
    def open(cls, path: str | Path, create: bool = False) -> FileSession:
        """Load ``path`` into a new session positioned at the start.

        With ``create`` a missing file yields an empty session that is
        created on its first ``write``. Other read failures raise ``OSError``.
        """
        path = Path(path)
        try:
            content, encoding, newline = read_text(path)
        except FileNotFoundError:
            if not create:
                raise
            logger.info("opening new file %s", path)
            return cls(path)
        session = cls(path, content, modified_stamp(path), encoding, newline)
        logger.info("opened %s (%d chars, %s)", path, len(content), encoding)
        return session

    @property
    def label(self) -> str:
        return str(self.path)

    def goto(self, target: Position) -> None:
        self.position = navigation.resolve(self.content, target)

    def move(self, direction: str) -> None:
        self.position = navigation.move(self.content, self.position, direction)

    def refresh(self) -> bool:
        """Reload the file when its on-disk stamp differs from the stored one.

        The cursor is re-resolved against the new text so it stays on a
        reachable boundary even if the file shrank. A file that disappeared
        is left untouched.
        """
        try:
            stamp = modified_stamp(self.path)
        except FileNotFoundError:
            return False
        if stamp == self.last_modified:
            return False
        self.content, self.encoding, self.newline = read_text(self.path)
        self.last_modified = stamp
        self.modified = False
        self.goto(self.position)
        logger.info("reloaded %s after external change", self.path)
        return True

    def write(self) -> None:
        """Persist the buffer and remember the stamp of the written file.

        Lines are terminated with the file's original ``newline``.
        """
        with open(self.path, "w", encoding=self.encoding, newline=self.newline) as handle:
            handle.write(self.content)
        self.last_modified = modified_stamp(self.path)
        self.modified = False
        logger.info("wrote %s", self.path)

    def render(self, size: Size) -> tuple[Position, Position]:
        """Scroll the offset to keep the cursor visible.

        Returns ``(absolute, relative)`` where ``relative`` is the cursor's
        location inside the ``size`` window.
        """
        self.offset, _changed = shift(self.offset, self.position, size)
        relative = START + (self.position - self.offset)
        return self.position, relative

    def visible_lines(self, size: Size) -> list[str]:
        """Return the window of text rows selected by the current offset."""
        rows = self.content.split(EOL)[self.offset.line : self.offset.line + size.lines]
        start = self.offset.column
        end = start + size.columns
        return [row[start:end] for row in rows]

    def insert(self, text: str) -> None:
        """Insert ``text`` at the cursor and move the cursor past it."""
        if not text:
            return
        index = navigation.index_of(self.content, self.position)
        self.content = self.content[:index] + text + self.content[index:]
        position = self.position
        for character in text:
            position = next_position(position, character)
        self.position = position
        self.modified = True

    def delete_backward(self) -> None:
        """Remove the character before the cursor."""
        index = navigation.index_of(self.content, self.position)
        if index == 0:
            return
        previous = navigation.move_left(self.content, self.position)
        self.content = self.content[: index - 1] + self.content[index:]
        self.position = previous
        self.modified = True

    def delete_forward(self) -> None:
        """Remove the character under the cursor."""
        index = navigation.index_of(self.content, self.position)
        if index >= len(self.content):
            return
        self.content = self.content[:index] + self.content[index + 1 :]
        self.modified = True


__all__ = [
    "CRLF",
    "FALLBACK_ENCODING",
    "READ_ENCODING",
    "FileSession",
    "modified_stamp",
    "read_text",
]
