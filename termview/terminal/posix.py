"""termios-based backend for Linux, macOS and other POSIX terminals."""

from __future__ import annotations

import logging
import os
import termios
import tty

from ..state import WindowSize
from .base import Terminal

logger = logging.getLogger(__name__)


class PosixTerminal(Terminal):
    """Raw mode via ``tty.setraw`` inside the alternate screen buffer."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        super().__init__(stdin_fd, stdout_fd)
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_raw_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and make sure the cursor is shown.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25h")
        logger.debug("raw mode enabled on fd %d", self.stdin_fd)

    def disable_raw_mode(self) -> None:
        os.write(self.stdout_fd, b"\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        logger.debug("raw mode disabled on fd %d", self.stdin_fd)

    def get_window_size(self) -> WindowSize:
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return super().get_window_size()
        return WindowSize.from_terminal(size.lines, size.columns)
