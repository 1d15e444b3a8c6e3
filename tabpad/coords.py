"""Viewport coordinate arithmetic.

Defines the zero-based ``Position``/``Size`` value types, the one-character
advance rule, and the recentering scroll policy used by every viewport.
"""

from __future__ import annotations

from dataclasses import dataclass

EOL = "\n"
# Terminal cells are addressed with 16-bit 1-based coordinates.
MAX_CELL = 65_535


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based ``(line, column)`` location, ordered lexicographically."""

    line: int = 0
    column: int = 0

    def __add__(self, size: Size) -> Position:
        if not isinstance(size, Size):
            return NotImplemented
        return Position(self.line + size.lines, self.column + size.columns)

    def __sub__(self, other: Position) -> Size:
        if not isinstance(other, Position):
            return NotImplemented
        return Size(self.line - other.line, self.column - other.column)

    def to_cell(self) -> tuple[int, int] | None:
        """Return 1-based ``(column, row)`` or ``None`` when not addressable."""
        column = self.column + 1
        row = self.line + 1
        if not (1 <= column <= MAX_CELL and 1 <= row <= MAX_CELL):
            return None
        return column, row


@dataclass(frozen=True)
class Size:
    """Viewport dimensions in lines and columns."""

    lines: int
    columns: int

    @classmethod
    def from_terminal(cls, columns: int, lines: int) -> Size:
        return cls(lines=lines, columns=columns)


START = Position(0, 0)


def next_position(position: Position, character: str) -> Position:
    """Advance ``position`` past one character."""
    if character == EOL:
        return Position(position.line + 1, 0)
    return Position(position.line, position.column + 1)


def _shift_axis(offset: int, target: int, extent: int) -> int:
    if offset <= target < offset + extent:
        return offset
    half = extent // 2
    return target - half if target >= half else 0


def shift(offset: Position, target: Position, size: Size) -> tuple[Position, bool]:
    """Scroll ``offset`` so ``target`` is visible inside a ``size`` window.

    Each axis is handled independently: a target already inside the half-open
    window keeps the offset, otherwise the window is recentered on the target
    (clamped at zero). Returns ``(new_offset, changed)``.
    """
    moved = Position(
        _shift_axis(offset.line, target.line, size.lines),
        _shift_axis(offset.column, target.column, size.columns),
    )
    return moved, moved != offset


__all__ = [
    "EOL",
    "MAX_CELL",
    "Position",
    "Size",
    "START",
    "next_position",
    "shift",
]
