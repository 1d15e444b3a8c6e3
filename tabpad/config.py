"""Persistent JSON config helpers.

Stores the hidden-file preference, the empty-confirm policy, the change-poll
interval, and key-binding overrides. Malformed or missing config falls back
to defaults.
"""

from __future__ import annotations

import json
from collections.abc import Collection
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "tabpad"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

EMPTY_CONFIRM_OPEN_QUERY = "open-query"
EMPTY_CONFIRM_IGNORE = "ignore"
EMPTY_CONFIRM_MESSAGE = "message"
EMPTY_CONFIRM_POLICIES = (
    EMPTY_CONFIRM_OPEN_QUERY,
    EMPTY_CONFIRM_IGNORE,
    EMPTY_CONFIRM_MESSAGE,
)
DEFAULT_POLL_SECONDS = 0.5


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config directory never
    interrupts editing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def load_show_hidden() -> bool:
    """Return persisted hidden-file visibility; non-booleans mean ``False``."""
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else False


def save_show_hidden(show_hidden: bool) -> None:
    config = load_config()
    config["show_hidden"] = bool(show_hidden)
    save_config(config)


def load_empty_confirm_policy() -> str:
    value = load_config().get("empty_confirm")
    if isinstance(value, str) and value.strip() in EMPTY_CONFIRM_POLICIES:
        return value.strip()
    return EMPTY_CONFIRM_OPEN_QUERY


def load_poll_seconds() -> float:
    """Return the external-change poll interval in seconds.

    Booleans, non-numbers, and non-positive values fall back to the default.
    """
    value = load_config().get("poll_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_POLL_SECONDS
    if value <= 0:
        return DEFAULT_POLL_SECONDS
    return float(value)


def load_key_overrides(mode: str, actions: Collection[str]) -> dict[str, str]:
    """Load ``{key_token: action}`` overrides for one mode.

    Entries with empty tokens or actions outside ``actions`` are dropped.
    """
    keys = load_config().get("keys")
    if not isinstance(keys, dict):
        return {}
    raw = keys.get(mode)
    if not isinstance(raw, dict):
        return {}
    overrides: dict[str, str] = {}
    for token, action in raw.items():
        if not isinstance(token, str) or not token:
            continue
        if not isinstance(action, str) or action not in actions:
            continue
        overrides[token] = action
    return overrides


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_POLL_SECONDS",
    "EMPTY_CONFIRM_IGNORE",
    "EMPTY_CONFIRM_MESSAGE",
    "EMPTY_CONFIRM_OPEN_QUERY",
    "EMPTY_CONFIRM_POLICIES",
    "load_config",
    "load_empty_confirm_policy",
    "load_key_overrides",
    "load_poll_seconds",
    "load_show_hidden",
    "save_config",
    "save_show_hidden",
]
