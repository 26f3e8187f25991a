"""Terminal capability interface and backend selection.

The viewer core talks only to ``Terminal``; the platform backend is chosen
once at startup by ``create_terminal``.
"""

from __future__ import annotations

import sys

from .base import Terminal


def create_terminal(stdin_fd: int, stdout_fd: int, platform: str | None = None) -> Terminal:
    """Build the terminal backend for ``platform`` (defaults to this host)."""
    platform = sys.platform if platform is None else platform
    if platform.startswith("win"):
        from .windows import WindowsTerminal

        return WindowsTerminal(stdin_fd, stdout_fd)

    from .posix import PosixTerminal

    return PosixTerminal(stdin_fd, stdout_fd)


__all__ = ["Terminal", "create_terminal"]
