"""Event-loop dispatch tests.

Drives ``run_viewer`` through real pipes with a fake terminal backend to
check key routing, the nested search loop, and raw-mode symmetry.
"""

from __future__ import annotations

import os
import unittest
from unittest import mock

from termview import input as keys
from termview import runtime
from termview.content import ContentBuffer
from termview.render import clear_screen_sequence
from termview.state import WindowSize
from termview.terminal import Terminal


class FakeTerminal(Terminal):
    def __init__(self, can_poll_input: bool = True) -> None:
        super().__init__(stdin_fd=0, stdout_fd=1)
        self.can_poll_input = can_poll_input
        self.events: list[str] = []

    def enable_raw_mode(self) -> None:
        self.events.append("enable")

    def disable_raw_mode(self) -> None:
        self.events.append("disable")

    def get_window_size(self) -> WindowSize:
        return WindowSize(rows=4, cols=40)


def _session(lines: list[str]) -> runtime.ViewerState:
    return runtime.create_session(ContentBuffer(lines), WindowSize(rows=4, cols=40), "label")


def _run(state: runtime.ViewerState, script: bytes, terminal: FakeTerminal | None = None) -> tuple[FakeTerminal, str]:
    terminal = terminal or FakeTerminal()
    in_read, in_write = os.pipe()
    out_read, out_write = os.pipe()
    try:
        os.write(in_write, script)
        os.close(in_write)
        in_write = -1
        runtime.run_viewer(state, terminal, in_read, out_write, esc_timeout_ms=20)
        os.close(out_write)
        out_write = -1
        chunks: list[bytes] = []
        while True:
            chunk = os.read(out_read, 65536)
            if not chunk:
                break
            chunks.append(chunk)
    finally:
        for fd in (in_read, in_write, out_read, out_write):
            if fd != -1:
                os.close(fd)
    return terminal, b"".join(chunks).decode("utf-8")


class HandleKeyTests(unittest.TestCase):
    def test_quit_key_ends_session(self) -> None:
        state = _session(["a"])
        self.assertFalse(runtime.handle_key(state, runtime.QUIT_KEY, lambda: keys.ESC, lambda: None))

    def test_eof_ends_session(self) -> None:
        state = _session(["a"])
        self.assertFalse(runtime.handle_key(state, keys.EOF, lambda: keys.ESC, lambda: None))

    def test_navigation_key_moves_cursor(self) -> None:
        state = _session(["a", "b"])
        self.assertTrue(runtime.handle_key(state, keys.ARROW_DOWN, lambda: keys.ESC, lambda: None))
        self.assertEqual(state.cursor.y, 2)

    def test_unknown_and_error_keys_are_ignored(self) -> None:
        state = _session(["abc"])
        for key in (ord("x"), keys.ERROR, keys.DELETE, keys.ctrl("a")):
            self.assertTrue(runtime.handle_key(state, key, lambda: keys.ESC, lambda: None))
        self.assertEqual((state.cursor.x, state.cursor.y), (1, 1))

    def test_search_key_enters_search_loop(self) -> None:
        state = _session(["abc"])
        with mock.patch("termview.runtime.run_search") as run_search_mock:
            self.assertTrue(runtime.handle_key(state, runtime.SEARCH_KEY, lambda: keys.ESC, lambda: None))
        run_search_mock.assert_called_once()


class RunViewerTests(unittest.TestCase):
    def test_navigation_then_quit(self) -> None:
        state = _session(["first", "second", "third"])
        terminal, output = _run(state, b"\x1b[B\x1b[F\x11")

        self.assertEqual(terminal.events, ["enable", "disable"])
        self.assertEqual((state.cursor.x, state.cursor.y), (7, 2))
        self.assertIn("Rows:4 X:7 Y:2", output)
        self.assertTrue(output.endswith(clear_screen_sequence()))

    def test_search_highlights_match_then_restores_on_enter(self) -> None:
        state = _session(["alpha", "beta", "gamma"])
        _, output = _run(state, b"\x1b[B\x1b[B\x06be\r\x11")

        self.assertIn("\033[7mbeta\033[0m", output)
        self.assertIn("Search (Use Esc/Arrows/Enter)", output)
        self.assertEqual((state.cursor.x, state.cursor.y), (1, 3))
        self.assertFalse(state.search.active)

    def test_closed_input_ends_session_and_restores_terminal(self) -> None:
        state = _session(["a"])
        terminal, _ = _run(state, b"")
        self.assertEqual(terminal.events, ["enable", "disable"])

    def test_terminal_restored_when_loop_raises(self) -> None:
        state = _session(["a"])
        terminal = FakeTerminal()
        with mock.patch("termview.runtime.handle_key", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                _run(state, b"x", terminal)
        self.assertEqual(terminal.events, ["enable", "disable"])

    def test_backend_without_input_polling_reads_synchronously(self) -> None:
        state = _session(["a"])
        terminal = FakeTerminal(can_poll_input=False)
        with mock.patch("termview.runtime.keys.read_key", return_value=runtime.QUIT_KEY) as read_key_mock:
            _run(state, b"", terminal)
        self.assertIsNone(read_key_mock.call_args.args[1])


if __name__ == "__main__":
    unittest.main()
