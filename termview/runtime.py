"""Main interactive event loop for the viewer.

Each iteration renders a full frame, blocks for one key and dispatches it.
The search prompt runs as a nested loop inside a single dispatch.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from . import input as keys
from .content import ContentBuffer
from .render import clear_screen_sequence, refresh_screen
from .search import run_search
from .state import DEFAULT_STATUS_LABEL, ViewerState, WindowSize
from .terminal import Terminal
from .viewport import move_cursor

logger = logging.getLogger(__name__)

QUIT_KEY = keys.ctrl("q")
SEARCH_KEY = keys.ctrl("f")


def create_session(
    content: ContentBuffer,
    window: WindowSize,
    status_label: str = DEFAULT_STATUS_LABEL,
) -> ViewerState:
    return ViewerState(content=content, window=window, status_label=status_label)


def handle_key(
    state: ViewerState,
    key: int,
    read_key: Callable[[], int],
    redraw: Callable[[], None],
) -> bool:
    """Dispatch one key; returns ``False`` when the session should end."""
    if key == QUIT_KEY or key == keys.EOF:
        return False
    if key == SEARCH_KEY:
        run_search(state, read_key, redraw)
        return True
    if key in keys.NAVIGATION_KEYS:
        move_cursor(state, key)
        return True
    logger.debug("ignored key %s", keys.key_name(key))
    return True


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def run_viewer(
    state: ViewerState,
    terminal: Terminal,
    stdin_fd: int,
    stdout_fd: int,
    esc_timeout_ms: int | None = keys.ESC_SEQUENCE_TIMEOUT_MS,
) -> None:
    """Run the viewer until the quit key, restoring the terminal on every exit."""
    timeout = esc_timeout_ms if terminal.can_poll_input else None

    def write(text: str) -> None:
        _write_all(stdout_fd, text.encode("utf-8", errors="replace"))

    def redraw() -> None:
        refresh_screen(state, write)

    def next_key() -> int:
        return keys.read_key(stdin_fd, timeout)

    logger.info(
        "session started: %d lines, window %dx%d",
        state.content.line_count,
        state.window.cols,
        state.window.rows,
    )
    with terminal.raw_mode():
        try:
            while True:
                redraw()
                if not handle_key(state, next_key(), next_key, redraw):
                    break
        finally:
            write(clear_screen_sequence())
    logger.info("session ended")
