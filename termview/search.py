"""Incremental, bidirectional, wrap-around literal search.

The search prompt is a synchronous sub-loop of the main loop: it captures
the reading position on entry, moves the cursor to each live match while the
query is typed, and always restores the captured position on exit.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Callable

from . import input as keys
from .state import SearchDirection, SearchState, ViewerState
from .viewport import clamp_cursor

logger = logging.getLogger(__name__)

EXIT_KEYS = frozenset({keys.ESC, keys.ENTER})
ERASE_KEYS = frozenset({keys.BACKSPACE, keys.DELETE, keys.ctrl("h")})
FORWARD_KEYS = frozenset({keys.ARROW_RIGHT, keys.ARROW_DOWN})
BACKWARD_KEYS = frozenset({keys.ARROW_LEFT, keys.ARROW_UP})


def is_query_char(key: int) -> bool:
    """Printable 7-bit characters that may be appended to the query."""
    return 0 <= key < 128 and unicodedata.category(chr(key)) != "Cc"


def edit_query(query: str, key: int) -> str:
    """Apply one prompt key to ``query``; other keys leave it unchanged."""
    if key in ERASE_KEYS:
        return query[:-1]
    if is_query_char(key):
        return query + chr(key)
    return query


def begin_search(state: ViewerState) -> None:
    """Enter the prompt, remembering where the reader was."""
    state.search = SearchState(active=True, saved=state.snapshot())
    logger.debug("search started at x=%d y=%d", state.cursor.x, state.cursor.y)


def end_search(state: ViewerState) -> None:
    """Leave the prompt, restoring the saved position and resetting fields."""
    saved = state.search.saved
    if saved is not None:
        state.restore(saved)
    state.search = SearchState()
    logger.debug("search ended, restored x=%d y=%d", state.cursor.x, state.cursor.y)


def find_next(state: ViewerState) -> bool:
    """Scan for the query from the last match, wrapping once around the buffer.

    On a hit the cursor moves onto the match and ``offset_y`` is pushed past
    the buffer so the next offset recompute snaps the match line into view.
    """
    search = state.search
    query = search.query
    line_count = state.content.line_count
    current = search.last_match_line if search.last_match_line != -1 else 0
    step = search.direction.value

    for _ in range(line_count):
        line = state.content.line(current) or ""
        index = line.find(query, search.last_match_column)
        if index != -1:
            search.last_match_line = current
            search.last_match_column = index + 1
            state.cursor.y = current + 1
            state.cursor.x = index + 1
            state.offset.offset_y = line_count
            clamp_cursor(state)
            logger.debug("match for %r at line %d column %d", query, current + 1, index + 1)
            return True

        search.last_match_column = 0
        current += step
        if current == line_count:
            current = 0
        elif current == -1:
            current = line_count - 1
    return False


def on_key(state: ViewerState, key: int) -> bool:
    """Update direction for ``key`` and run the match step.

    Arrow keys continue from the last match in their direction; any other key
    means the query changed, so the scan restarts from the first line.
    """
    search = state.search
    if not search.query:
        search.direction = SearchDirection.FORWARD
        search.last_match_line = -1
        return False

    if key in FORWARD_KEYS:
        search.direction = SearchDirection.FORWARD
    elif key in BACKWARD_KEYS:
        search.direction = SearchDirection.BACKWARD
    else:
        search.direction = SearchDirection.FORWARD
        search.last_match_line = -1
        search.last_match_column = 0
    return find_next(state)


def run_search(
    state: ViewerState,
    read_key: Callable[[], int],
    redraw: Callable[[], None],
) -> None:
    """Run the search prompt until ESC or ENTER, then restore the position."""
    begin_search(state)
    try:
        while True:
            redraw()
            key = read_key()
            if key in EXIT_KEYS or key == keys.EOF:
                return
            if key == keys.ERROR:
                continue
            state.search.query = edit_query(state.search.query, key)
            on_key(state, key)
    finally:
        end_search(state)
