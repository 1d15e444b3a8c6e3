"""Input-layer public API for key decoding and per-mode key tables.

Low-level terminal decoding (``read_key``) is kept apart from the action
tables the controller dispatches through.
"""

from .keymap import (
    COMMAND_ACTIONS,
    SWITCH_ACTIONS,
    KeyMap,
    command_keymap,
    is_query_character,
    switch_keymap,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "COMMAND_ACTIONS",
    "SWITCH_ACTIONS",
    "KeyMap",
    "command_keymap",
    "switch_keymap",
    "is_query_character",
]
