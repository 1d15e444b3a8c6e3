"""Character-index to line/column resolution and cursor targets.

Every cursor move is expressed as a target Position that is then resolved
against the content by a linear walk. Resolution returns the greatest
reachable Position not exceeding the target, which is what clamps moves to
shorter lines and to the end of the content.
"""

from __future__ import annotations

import sys

from .coords import START, Position, next_position

# Column/line value that is larger than any reachable coordinate.
FAR = sys.maxsize


def resolve(content: str, target: Position) -> Position:
    """Return the last reachable Position in ``content`` that is ``<= target``."""
    position = START
    resolved = START
    for character in content:
        position = next_position(position, character)
        if position <= target:
            resolved = position
        else:
            break
    return resolved


def index_of(content: str, position: Position) -> int:
    """Return the character index whose boundary lies at ``position``.

    Positions that are not reachable map to the index of the nearest reachable
    boundary below them, matching ``resolve``.
    """
    current = START
    for index, character in enumerate(content):
        if current >= position:
            return index
        following = next_position(current, character)
        if following > position:
            return index
        current = following
    return len(content)


def up(position: Position) -> Position:
    return Position(max(0, position.line - 1), position.column)


def down(position: Position) -> Position:
    return Position(position.line + 1, position.column)


def line_start(position: Position) -> Position:
    return Position(position.line, 0)


def line_end(position: Position) -> Position:
    return Position(position.line, FAR)


def document_start(_position: Position) -> Position:
    return START


def document_end(_position: Position) -> Position:
    return Position(FAR, FAR)


def move_left(content: str, position: Position) -> Position:
    """Step to the previous character boundary, crossing line terminators."""
    if position.column > 0:
        return resolve(content, Position(position.line, position.column - 1))
    if position.line > 0:
        return resolve(content, Position(position.line - 1, FAR))
    return position


def move_right(content: str, position: Position) -> Position:
    """Step to the next character boundary; a no-op at the end of content."""
    same_line = resolve(content, Position(position.line, position.column + 1))
    if same_line != position:
        return same_line
    next_line = resolve(content, Position(position.line + 1, 0))
    if next_line > position:
        return next_line
    return position


# Targets that depend only on the current position.
TARGETS = {
    "up": up,
    "down": down,
    "line_start": line_start,
    "line_end": line_end,
    "document_start": document_start,
    "document_end": document_end,
}

# Moves that need the content to find the neighbouring boundary.
STEPS = {
    "left": move_left,
    "right": move_right,
}


def move(content: str, position: Position, direction: str) -> Position:
    """Resolve one named cursor move against ``content``."""
    step = STEPS.get(direction)
    if step is not None:
        return step(content, position)
    target = TARGETS[direction](position)
    return resolve(content, target)


__all__ = [
    "FAR",
    "STEPS",
    "TARGETS",
    "document_end",
    "document_start",
    "down",
    "index_of",
    "line_end",
    "line_start",
    "move",
    "move_left",
    "move_right",
    "resolve",
    "up",
]
