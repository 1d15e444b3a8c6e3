"""Key-token to action tables for command and switch modes.

Defaults follow a home-row layout (``a``/``s``/``d``/``f`` move, upper case
jumps). Config ``keys`` entries override or extend the defaults per mode.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..config import load_key_overrides

COMMAND_ACTIONS = frozenset(
    {
        "toggle_mode",
        "quit",
        "suspend",
        "save",
        "save_all",
        "close",
        "next_file",
        "previous_file",
        "up",
        "down",
        "left",
        "right",
        "line_start",
        "line_end",
        "document_start",
        "document_end",
        "page_up",
        "page_down",
        "insert_newline",
        "delete_backward",
        "delete_forward",
    }
)

SWITCH_ACTIONS = frozenset(
    {
        "toggle_mode",
        "toggle_hidden",
        "select_up",
        "select_down",
        "query_backspace",
        "confirm",
    }
)

DEFAULT_COMMAND_KEYS: dict[str, str] = {
    "TAB": "toggle_mode",
    "B": "quit",
    "CTRL_C": "quit",
    "b": "suspend",
    "CTRL_Z": "suspend",
    "w": "save",
    "W": "save_all",
    "x": "close",
    "n": "next_file",
    "p": "previous_file",
    "a": "up",
    "s": "down",
    "d": "left",
    "f": "right",
    "UP": "up",
    "DOWN": "down",
    "LEFT": "left",
    "RIGHT": "right",
    "A": "document_start",
    "S": "document_end",
    "D": "line_start",
    "F": "line_end",
    "HOME": "line_start",
    "END": "line_end",
    "PAGE_UP": "page_up",
    "PAGE_DOWN": "page_down",
    "ENTER": "insert_newline",
    "BACKSPACE": "delete_backward",
    "DELETE": "delete_forward",
}

DEFAULT_SWITCH_KEYS: dict[str, str] = {
    "TAB": "toggle_mode",
    "SHIFT_TAB": "toggle_hidden",
    "UP": "select_up",
    "DOWN": "select_down",
    "BACKSPACE": "query_backspace",
    "ENTER": "confirm",
}


@dataclass(frozen=True)
class KeyMap:
    """Immutable ``{key_token: action}`` table for one mode."""

    bindings: Mapping[str, str]

    def action_for(self, key: str) -> str | None:
        return self.bindings.get(key)

    def dispatch(self, key: str, handlers: Mapping[str, Callable[[], None]]) -> bool:
        """Invoke the handler bound to ``key``; return whether one ran."""
        action = self.action_for(key)
        if action is None:
            return False
        handler = handlers.get(action)
        if handler is None:
            return False
        handler()
        return True


def command_keymap(overrides: Mapping[str, str] | None = None) -> KeyMap:
    if overrides is None:
        overrides = load_key_overrides("command", COMMAND_ACTIONS)
    return KeyMap({**DEFAULT_COMMAND_KEYS, **overrides})


def switch_keymap(overrides: Mapping[str, str] | None = None) -> KeyMap:
    if overrides is None:
        overrides = load_key_overrides("switch", SWITCH_ACTIONS)
    return KeyMap({**DEFAULT_SWITCH_KEYS, **overrides})


def is_query_character(key: str) -> bool:
    """Return whether ``key`` is a printable character for the picker query."""
    return len(key) == 1 and key.isprintable()


__all__ = [
    "COMMAND_ACTIONS",
    "DEFAULT_COMMAND_KEYS",
    "DEFAULT_SWITCH_KEYS",
    "KeyMap",
    "SWITCH_ACTIONS",
    "command_keymap",
    "is_query_character",
    "switch_keymap",
]
