"""Cursor movement and minimal-scroll viewport math.

Every operation clamps rather than fails: calling a move at a boundary is a
no-op. ``recompute_offsets`` runs once per frame before rendering.
"""

from __future__ import annotations

from . import input as keys
from .state import ViewerState


def move_up(state: ViewerState, rows: int = 1) -> None:
    """Move up ``rows`` lines, only if the cursor stays on line 1 or below."""
    if state.cursor.y - rows >= 1:
        state.cursor.y -= rows


def move_down(state: ViewerState, rows: int = 1) -> None:
    """Move down ``rows`` lines, only if the cursor stays inside the buffer."""
    if state.cursor.y + rows <= state.content.line_count:
        state.cursor.y += rows


def move_left(state: ViewerState) -> None:
    """Step left, wrapping to the end of the previous line at column 1."""
    cursor = state.cursor
    if cursor.x > 1:
        cursor.x -= 1
    elif cursor.y > 1:
        cursor.x = state.content.line_length(cursor.y - 2) + 1
        cursor.y -= 1


def move_right(state: ViewerState) -> None:
    """Step right, wrapping to the start of the next line past the end."""
    line = state.current_line()
    if line is None:
        return
    cursor = state.cursor
    if cursor.x <= len(line):
        cursor.x += 1
    elif cursor.x == len(line) + 1 and cursor.y < state.content.line_count:
        cursor.x = 1
        cursor.y += 1


def move_home(state: ViewerState) -> None:
    state.cursor.x = 1


def move_end(state: ViewerState) -> None:
    line = state.current_line()
    state.cursor.x = len(line) + 1 if line is not None else 1


def page_up(state: ViewerState) -> None:
    """Snap to the top visible row, then move up one screen."""
    state.cursor.y = state.offset.offset_y + 1
    move_up(state, state.window.rows)


def page_down(state: ViewerState) -> None:
    """Snap to the bottom visible row, then move down one screen."""
    bottom = state.offset.offset_y + state.window.rows
    state.cursor.y = min(bottom, max(1, state.content.line_count))
    move_down(state, state.window.rows)


def clamp_cursor(state: ViewerState) -> None:
    """Pull the cursor back onto a valid cell of the buffer.

    ``y`` stays within ``[1, max(1, line_count)]`` and ``x`` within
    ``[1, len(line) + 1]``; one past the last character is a valid column.
    """
    cursor = state.cursor
    cursor.y = max(1, min(cursor.y, max(1, state.content.line_count)))
    line = state.current_line()
    max_x = len(line) + 1 if line is not None else 1
    cursor.x = max(1, min(cursor.x, max_x))


def recompute_offsets(state: ViewerState) -> None:
    """Scroll the minimum amount needed to keep the cursor visible."""
    cursor = state.cursor
    offset = state.offset
    rows = state.window.rows
    cols = state.window.cols

    if cursor.y >= offset.offset_y + rows:
        offset.offset_y = cursor.y - rows
    if cursor.y <= offset.offset_y:
        offset.offset_y = cursor.y - 1

    if cursor.x >= offset.offset_x + cols:
        offset.offset_x = cursor.x - cols
    if cursor.x <= offset.offset_x:
        offset.offset_x = cursor.x - 1


_MOVES = {
    keys.ARROW_UP: move_up,
    keys.ARROW_DOWN: move_down,
    keys.ARROW_LEFT: move_left,
    keys.ARROW_RIGHT: move_right,
    keys.HOME: move_home,
    keys.END: move_end,
    keys.PAGE_UP: page_up,
    keys.PAGE_DOWN: page_down,
}


def move_cursor(state: ViewerState, key: int) -> bool:
    """Apply navigation ``key``; returns ``False`` for non-navigation keys."""
    move = _MOVES.get(key)
    if move is None:
        return False
    move(state)
    clamp_cursor(state)
    return True
