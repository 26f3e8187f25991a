"""Session data model shared by the viewport, renderer and search engine.

One ``ViewerState`` value is owned by the main loop and passed explicitly
to every operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .content import ContentBuffer

DEFAULT_STATUS_LABEL = "termview - Ctrl+F find | Ctrl+Q quit"


@dataclass
class CursorPosition:
    """1-based cursor coordinates, matching terminal conventions."""

    x: int = 1
    y: int = 1


@dataclass
class ViewportOffset:
    """0-based content coordinate of the top-left visible cell."""

    offset_x: int = 0
    offset_y: int = 0


@dataclass(frozen=True)
class WindowSize:
    """Usable content area; ``rows`` already excludes the status bar."""

    rows: int
    cols: int

    @classmethod
    def from_terminal(cls, term_rows: int, term_cols: int) -> WindowSize:
        return cls(rows=max(1, term_rows - 1), cols=max(1, term_cols))


class SearchDirection(Enum):
    FORWARD = 1
    BACKWARD = -1


@dataclass(frozen=True)
class SavedPosition:
    cursor: CursorPosition
    offset: ViewportOffset


@dataclass
class SearchState:
    active: bool = False
    direction: SearchDirection = SearchDirection.FORWARD
    query: str = ""
    last_match_line: int = -1  # 0-based, -1 = none
    last_match_column: int = 0  # resume column within last_match_line
    saved: SavedPosition | None = None


@dataclass
class ViewerState:
    content: ContentBuffer
    window: WindowSize
    cursor: CursorPosition = field(default_factory=CursorPosition)
    offset: ViewportOffset = field(default_factory=ViewportOffset)
    search: SearchState = field(default_factory=SearchState)
    status_label: str = DEFAULT_STATUS_LABEL

    def current_line(self) -> str | None:
        """Line under the cursor, or ``None`` past the end of the buffer."""
        return self.content.line(self.cursor.y - 1)

    def snapshot(self) -> SavedPosition:
        return SavedPosition(
            cursor=CursorPosition(self.cursor.x, self.cursor.y),
            offset=ViewportOffset(self.offset.offset_x, self.offset.offset_y),
        )

    def restore(self, saved: SavedPosition) -> None:
        self.cursor = CursorPosition(saved.cursor.x, saved.cursor.y)
        self.offset = ViewportOffset(saved.offset.offset_x, saved.offset.offset_y)
