"""Regression tests for raw-key decoding.

Covers ESC timing, cursor and editing sequences, control-key tokens, and
multi-byte UTF-8 input read through a pipe.
"""

import os
import time
import unittest

from tabpad.input import reader


def _read_all(data: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def test_timeout_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            started = time.monotonic()
            key = reader.read_key(read_fd, timeout_ms=10)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")
        self.assertLess(elapsed, 0.5)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        self.assertEqual(_read_all(b"\x1b", 1), ["ESC"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_cursor_sequences(self) -> None:
        self.assertEqual(
            _read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA\x1b[Z", 6),
            ["UP", "DOWN", "RIGHT", "LEFT", "UP", "SHIFT_TAB"],
        )

    def test_tilde_sequences(self) -> None:
        self.assertEqual(
            _read_all(b"\x1b[3~\x1b[5~\x1b[6~\x1b[1~\x1b[4~\x1b[H\x1b[F", 7),
            ["DELETE", "PAGE_UP", "PAGE_DOWN", "HOME", "END", "HOME", "END"],
        )

    def test_modified_tilde_sequence_uses_first_parameter(self) -> None:
        self.assertEqual(_read_all(b"\x1b[3;5~", 1), ["DELETE"])

    def test_control_bytes_map_to_tokens(self) -> None:
        self.assertEqual(
            _read_all(b"\t\r\n\x7f\x03\x1a", 6),
            ["TAB", "ENTER", "ENTER", "BACKSPACE", "CTRL_C", "CTRL_Z"],
        )

    def test_printable_and_utf8_characters(self) -> None:
        self.assertEqual(_read_all("aZ.é€".encode("utf-8"), 5), ["a", "Z", ".", "é", "€"])


if __name__ == "__main__":
    unittest.main()
