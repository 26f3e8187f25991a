"""Abstract terminal backend shared by the platform implementations."""

from __future__ import annotations

import abc
import contextlib
import shutil

from ..state import WindowSize

DEFAULT_TERMINAL_SIZE = (80, 24)


class Terminal(abc.ABC):
    """Raw-mode lifecycle and window-size discovery for one platform."""

    # Whether ``select`` works on stdin, so a lone ESC can be told apart
    # from an escape sequence by waiting briefly for follow-up bytes.
    can_poll_input = True

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd

    @abc.abstractmethod
    def enable_raw_mode(self) -> None:
        """Deliver bytes immediately: no line buffering, echo, or signals."""

    @abc.abstractmethod
    def disable_raw_mode(self) -> None:
        """Restore the terminal state captured before ``enable_raw_mode``."""

    def get_window_size(self) -> WindowSize:
        """Return usable rows (status bar excluded) and columns."""
        size = shutil.get_terminal_size(DEFAULT_TERMINAL_SIZE)
        return WindowSize.from_terminal(size.lines, size.columns)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/exit calls."""
        try:
            self.enable_raw_mode()
            yield self
        finally:
            self.disable_raw_mode()
