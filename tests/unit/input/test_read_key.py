"""Regression tests for raw-key decoding.

Covers ESC timing, function keys in xterm/VT/linux-console forms, control
keys, and multi-byte UTF-8 input.
"""

from __future__ import annotations

import os
import time
import unittest

from lazycommander import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertEqual(input_mod.read_key(read_fd, timeout_ms=10), "")
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_arrow_keys(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[B", 2), ["UP", "DOWN"])
        self.assertEqual(self._read_all(b"\x1bOA\x1bOB", 2), ["UP", "DOWN"])

    def test_function_keys_ss3_form(self) -> None:
        self.assertEqual(self._read_all(b"\x1bOP\x1bOQ\x1bOR", 3), ["F1", "F2", "F3"])

    def test_function_keys_tilde_form(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[11~\x1b[12~\x1b[13~\x1b[15~\x1b[21~", 5),
            ["F1", "F2", "F3", "F5", "F10"],
        )

    def test_function_keys_linux_console_form(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[[A\x1b[[E", 2), ["F1", "F5"])

    def test_paging_and_home_end(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[5~\x1b[6~\x1b[H\x1b[F\x1b[1~\x1b[4~", 6),
            ["PAGE_UP", "PAGE_DOWN", "HOME", "END", "HOME", "END"],
        )

    def test_modified_cursor_key_maps_to_plain_direction(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[1;5A"), ["UP"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\t\x7f\x08\r\n\x11\x12\x15\x03", 9),
            ["TAB", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF", "CTRL_Q", "CTRL_R", "CTRL_U", "CTRL_C"],
        )

    def test_utf8_character_is_decoded_whole(self) -> None:
        self.assertEqual(self._read_all("é漢".encode("utf-8"), 2), ["é", "漢"])

    def test_broken_utf8_lead_does_not_swallow_next_key(self) -> None:
        self.assertEqual(self._read_all(b"\xc3a", 2), ["\ufffd", "a"])


if __name__ == "__main__":
    unittest.main()
