"""Win32 console backend using kernel32 console modes through ctypes.

Input is switched to virtual-terminal sequences so the same key decoder
handles arrow and paging keys on every platform.
"""

from __future__ import annotations

import ctypes
import logging
import os

from .base import Terminal

logger = logging.getLogger(__name__)

STD_INPUT_HANDLE = -10
STD_OUTPUT_HANDLE = -11

ENABLE_PROCESSED_INPUT = 0x0001
ENABLE_LINE_INPUT = 0x0002
ENABLE_ECHO_INPUT = 0x0004
ENABLE_WINDOW_INPUT = 0x0008
ENABLE_MOUSE_INPUT = 0x0010
ENABLE_VIRTUAL_TERMINAL_INPUT = 0x0200

ENABLE_PROCESSED_OUTPUT = 0x0001
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004

_RAW_INPUT_CLEARED = (
    ENABLE_ECHO_INPUT
    | ENABLE_LINE_INPUT
    | ENABLE_MOUSE_INPUT
    | ENABLE_WINDOW_INPUT
    | ENABLE_PROCESSED_INPUT
)


class WindowsTerminal(Terminal):
    """Console-mode raw input with VT processing on the output handle."""

    can_poll_input = False

    def __init__(self, stdin_fd: int, stdout_fd: int, kernel32=None) -> None:
        super().__init__(stdin_fd, stdout_fd)
        self._kernel32 = kernel32 if kernel32 is not None else ctypes.windll.kernel32
        self._saved_in_mode: int | None = None
        self._saved_out_mode: int | None = None

    def _console_mode(self, handle) -> int:
        mode = ctypes.c_uint32()
        if not self._kernel32.GetConsoleMode(handle, ctypes.byref(mode)):
            raise OSError("GetConsoleMode failed")
        return mode.value

    def enable_raw_mode(self) -> None:
        in_handle = self._kernel32.GetStdHandle(STD_INPUT_HANDLE)
        out_handle = self._kernel32.GetStdHandle(STD_OUTPUT_HANDLE)

        self._saved_in_mode = self._console_mode(in_handle)
        in_mode = (self._saved_in_mode & ~_RAW_INPUT_CLEARED) | ENABLE_VIRTUAL_TERMINAL_INPUT
        self._kernel32.SetConsoleMode(in_handle, in_mode)

        self._saved_out_mode = self._console_mode(out_handle)
        out_mode = self._saved_out_mode | ENABLE_VIRTUAL_TERMINAL_PROCESSING | ENABLE_PROCESSED_OUTPUT
        self._kernel32.SetConsoleMode(out_handle, out_mode)

        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25h")
        logger.debug("console raw mode enabled (in=%#x out=%#x)", in_mode, out_mode)

    def disable_raw_mode(self) -> None:
        os.write(self.stdout_fd, b"\x1b[?1049l")
        if self._saved_in_mode is not None:
            self._kernel32.SetConsoleMode(self._kernel32.GetStdHandle(STD_INPUT_HANDLE), self._saved_in_mode)
        if self._saved_out_mode is not None:
            self._kernel32.SetConsoleMode(self._kernel32.GetStdHandle(STD_OUTPUT_HANDLE), self._saved_out_mode)
        logger.debug("console raw mode disabled")
