"""Frame composition for the viewer.

Builds one output buffer per frame: content rows, the inverse-video status
or search bar, and the trailing hardware-cursor placement. Builders here are
pure; ``refresh_screen`` is the only function that writes.
"""

from __future__ import annotations

from collections.abc import Callable

from .state import ViewerState
from .viewport import recompute_offsets

CURSOR_HOME = "\033[H"
CLEAR_SCREEN = "\033[2J"
ERASE_LINE = "\033[K"
INVERSE = "\033[7m"
RESET = "\033[0m"
EMPTY_ROW = "~"
ELLIPSIS = "..."
SEARCH_PROMPT = "Search (Use Esc/Arrows/Enter)"
CONTROL_PLACEHOLDER = "?"

# One cell per character so cursor columns keep matching screen cells:
# tabs become a space, C0 controls, DEL and C1 controls a placeholder.
_DISPLAY_TABLE = {code: CONTROL_PLACEHOLDER for code in (*range(0x20), 0x7F, *range(0x80, 0xA0))}
_DISPLAY_TABLE[ord("\t")] = " "


def display_text(text: str) -> str:
    """Neutralize bytes that would move the terminal cursor or start escapes."""
    return text.translate(_DISPLAY_TABLE)


def visible_slice(line: str, offset_x: int, cols: int) -> str:
    """Horizontal viewport of ``line``; out-of-range slices degrade to ''."""
    start = max(0, offset_x)
    length = max(0, min(len(line) - start, cols))
    if length == 0:
        return ""
    return display_text(line[start : start + length])


def build_content_rows(state: ViewerState) -> list[str]:
    """Render each display row, tilde-filling rows past the end of content."""
    rows: list[str] = []
    content = state.content
    offset = state.offset
    search = state.search
    highlight_line = search.last_match_line if search.active else -1

    for i in range(state.window.rows):
        line_index = offset.offset_y + i
        line = content.line(line_index)
        if line is None:
            row = EMPTY_ROW
        else:
            row = visible_slice(line, offset.offset_x, state.window.cols)
            if row and line_index == highlight_line:
                row = f"{INVERSE}{row}{RESET}"
        rows.append(row + ERASE_LINE + "\r\n")
    return rows


def build_status_bar(info: str, label: str, cols: int) -> str:
    """Lay out ``info`` left and ``label`` right across exactly ``cols`` cells.

    At least three spaces separate the two; when that does not fit, the
    combined text is cut to ``cols - 3`` characters and ends in an ellipsis.
    """
    total = len(info) + len(label)
    if cols >= total + 3:
        return info + " " * max(3, cols - total) + label
    if cols < len(ELLIPSIS):
        return ELLIPSIS[:max(0, cols)]
    return (info + "   " + label)[: cols - len(ELLIPSIS)] + ELLIPSIS


def status_text(state: ViewerState) -> tuple[str, str]:
    """Return ``(info, label)`` for the current mode."""
    if state.search.active:
        return (state.search.query or SEARCH_PROMPT), ""
    info = f"Rows:{state.window.rows} X:{state.cursor.x} Y:{state.cursor.y}"
    return info, state.status_label


def build_frame(state: ViewerState) -> str:
    info, label = status_text(state)
    parts = [CURSOR_HOME]
    parts.extend(build_content_rows(state))
    parts.append(INVERSE)
    parts.append(build_status_bar(info, label, state.window.cols))
    parts.append(RESET)
    parts.append(CURSOR_HOME)
    return "".join(parts)


def cursor_sequence(state: ViewerState) -> str:
    """Place the terminal cursor on the cursor's visible cell (1-based)."""
    row = state.cursor.y - state.offset.offset_y
    col = state.cursor.x - state.offset.offset_x
    return f"\033[{row};{col}H"


def clear_screen_sequence() -> str:
    return CLEAR_SCREEN + CURSOR_HOME


def refresh_screen(state: ViewerState, write: Callable[[str], None]) -> None:
    """Scroll to the cursor, flush the frame, then position the cursor.

    The cursor move is a separate write after the frame so the terminal's
    own cursor lands on the intended cell.
    """
    recompute_offsets(state)
    write(build_frame(state))
    write(cursor_sequence(state))
