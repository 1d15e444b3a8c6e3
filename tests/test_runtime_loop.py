"""Tests for the interactive loop wiring.

Key reads and terminal size are patched so the loop runs headless; these
check render gating, idle polling, and signal draining order.
"""

from __future__ import annotations

import contextlib
import os
import unittest
from unittest import mock

from tabpad.controller import SIGNAL_QUIT, EditorController
from tabpad.input import command_keymap, switch_keymap
from tabpad.runtime.loop import RuntimeLoopTiming, run_main_loop
from tabpad.runtime.signals import SignalEvents
from tabpad.state import EditorState, Mode


class _FakeTerminal:
    def __init__(self) -> None:
        self.calls: list[str] = []

    @contextlib.contextmanager
    def raw_mode(self):
        self.calls.append("enter")
        try:
            yield
        finally:
            self.calls.append("leave")


def _controller(state: EditorState) -> EditorController:
    return EditorController(
        state,
        command_keys=command_keymap({}),
        switch_keys=switch_keymap({}),
        persist_hidden=lambda _value: None,
    )


class RunMainLoopTests(unittest.TestCase):
    def _run(
        self,
        controller: EditorController,
        keys: list[str],
        events: SignalEvents | None = None,
        terminal: _FakeTerminal | None = None,
    ):
        terminal = terminal or _FakeTerminal()
        with mock.patch("tabpad.runtime.loop.read_key", side_effect=keys) as read_mock, mock.patch(
            "tabpad.runtime.loop.shutil.get_terminal_size", return_value=os.terminal_size((80, 24))
        ), mock.patch("tabpad.runtime.loop.render_frame") as render_mock:
            run_main_loop(
                controller,
                terminal,
                events or SignalEvents(),
                stdin_fd=0,
                stdout_fd=1,
                timing=RuntimeLoopTiming(key_timeout_ms=5),
            )
        return terminal, read_mock, render_mock

    def test_quit_key_stops_loop_and_releases_terminal(self) -> None:
        state = EditorState()
        controller = _controller(state)

        terminal, read_mock, render_mock = self._run(controller, ["B"])

        self.assertFalse(state.run)
        self.assertEqual(terminal.calls, ["enter", "leave"])
        self.assertEqual(read_mock.call_count, 1)
        render_mock.assert_called_once()

    def test_idle_timeout_polls_and_skips_clean_render(self) -> None:
        state = EditorState()
        controller = _controller(state)

        with mock.patch.object(controller, "poll") as poll_mock:
            _terminal, _read_mock, render_mock = self._run(controller, ["", "", "B"])

        self.assertEqual(poll_mock.call_count, 2)
        self.assertEqual(render_mock.call_count, 1)

    def test_key_marks_dirty_and_triggers_render(self) -> None:
        state = EditorState()
        controller = _controller(state)

        with mock.patch.object(controller, "rebuild_listing") as rebuild_mock:
            _terminal, _read_mock, render_mock = self._run(controller, ["TAB", "TAB", "B"])

        rebuild_mock.assert_called_once()
        self.assertIs(state.mode, Mode.COMMAND)
        self.assertEqual(render_mock.call_count, 3)

    def test_pending_quit_signal_ends_loop_before_reading_keys(self) -> None:
        state = EditorState()
        controller = _controller(state)
        events = SignalEvents()
        events.push(SIGNAL_QUIT)

        terminal, read_mock, render_mock = self._run(controller, [], events)

        self.assertFalse(state.run)
        read_mock.assert_not_called()
        render_mock.assert_not_called()
        self.assertEqual(terminal.calls, ["enter", "leave"])

    def test_exception_in_handler_still_releases_terminal(self) -> None:
        state = EditorState()
        controller = _controller(state)

        terminal = _FakeTerminal()

        with mock.patch.object(controller, "handle_key", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                self._run(controller, ["w"], terminal=terminal)

        self.assertEqual(terminal.calls, ["enter", "leave"])


if __name__ == "__main__":
    unittest.main()
