"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from marcos.input import reader as reader_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self.read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        # Esc waits briefly for sequence bytes, but should not require another key press.
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(
            self.read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_shift_tab_and_page_keys(self) -> None:
        self.assertEqual(self.read_all(b"\x1b[Z\x1b[5~\x1b[6~", 3), ["SHIFT_TAB", "PAGE_UP", "PAGE_DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self.read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self.read_all(b"\t\x7f\x12\n\r", 5),
            ["TAB", "BACKSPACE", "CTRL_R", "ENTER_LF", "ENTER_CR"],
        )

    def test_crlf_from_one_enter_press_is_a_single_token(self) -> None:
        self.assertEqual(self.read_all(b"\r\nj", 3), ["ENTER_CR", "j", ""])

    def test_key_after_carriage_return_is_kept(self) -> None:
        self.assertEqual(self.read_all(b"\rj\r", 3), ["ENTER_CR", "j", "ENTER_CR"])

    def test_line_feed_arriving_later_is_its_own_key(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\r")
            first = reader_mod.read_key(read_fd, timeout_ms=20)
            time.sleep(reader_mod.CRLF_PAIR_TIMEOUT_MS / 1000.0 * 4)
            os.write(write_fd, b"\n")
            second = reader_mod.read_key(read_fd, timeout_ms=20)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual([first, second], ["ENTER_CR", "ENTER_LF"])

    def test_multibyte_utf8_character_is_one_token(self) -> None:
        self.assertEqual(self.read_all("é:".encode("utf-8"), 2), ["é", ":"])

    def test_timeout_without_input_returns_empty_token(self) -> None:
        self.assertEqual(self.read_all(b"", 1), [""])


if __name__ == "__main__":
    unittest.main()
