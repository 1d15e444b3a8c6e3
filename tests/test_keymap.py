"""Tests for per-mode key tables and config overrides."""

from __future__ import annotations

import unittest
from unittest import mock

from tabpad.input.keymap import (
    DEFAULT_COMMAND_KEYS,
    KeyMap,
    command_keymap,
    is_query_character,
    switch_keymap,
)


class KeyMapTests(unittest.TestCase):
    def test_dispatch_runs_bound_handler(self) -> None:
        calls: list[str] = []
        keys = KeyMap({"w": "save", "q": "unknown"})

        self.assertTrue(keys.dispatch("w", {"save": lambda: calls.append("save")}))
        self.assertFalse(keys.dispatch("z", {"save": lambda: calls.append("save")}))
        self.assertFalse(keys.dispatch("q", {"save": lambda: calls.append("save")}))
        self.assertEqual(calls, ["save"])

    def test_defaults_cover_home_row_navigation(self) -> None:
        keys = command_keymap({})

        self.assertEqual(
            [keys.action_for(key) for key in ("a", "s", "d", "f")],
            ["up", "down", "left", "right"],
        )
        self.assertEqual(keys.action_for("TAB"), "toggle_mode")
        self.assertEqual(keys.action_for("B"), "quit")
        self.assertEqual(keys.action_for("b"), "suspend")

    def test_overrides_extend_defaults(self) -> None:
        keys = command_keymap({"CTRL_S": "save", "w": "close"})

        self.assertEqual(keys.action_for("CTRL_S"), "save")
        self.assertEqual(keys.action_for("w"), "close")
        self.assertEqual(keys.action_for("x"), DEFAULT_COMMAND_KEYS["x"])

    def test_keymaps_read_config_when_no_overrides_given(self) -> None:
        with mock.patch(
            "tabpad.input.keymap.load_key_overrides", return_value={"CTRL_N": "select_down"}
        ) as load_mock:
            keys = switch_keymap()

        load_mock.assert_called_once()
        self.assertEqual(load_mock.call_args.args[0], "switch")
        self.assertEqual(keys.action_for("CTRL_N"), "select_down")
        self.assertEqual(keys.action_for("ENTER"), "confirm")

    def test_query_characters_are_single_printables(self) -> None:
        self.assertTrue(is_query_character("a"))
        self.assertTrue(is_query_character("/"))
        self.assertTrue(is_query_character("é"))
        self.assertFalse(is_query_character("UP"))
        self.assertFalse(is_query_character("\t"))
        self.assertFalse(is_query_character(""))


if __name__ == "__main__":
    unittest.main()
