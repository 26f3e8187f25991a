"""Read-only line buffer and the file loader that produces it.

The buffer is loaded once per session and never mutated afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import FileOpenError

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class ContentBuffer:
    """Immutable ordered sequence of text lines (0-based)."""

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines: tuple[str, ...] = tuple(lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str | None:
        """Return line ``index`` or ``None`` when it is out of range."""
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def line_length(self, index: int) -> int:
        """Length of line ``index``; missing lines count as empty."""
        text = self.line(index)
        return len(text) if text is not None else 0

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"ContentBuffer(line_count={len(self._lines)})"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8 (dropping a leading BOM), then latin-1; as a final
    fallback decodes raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def split_lines(source: str) -> list[str]:
    """Split on ``\\n``, ``\\r`` and ``\\r\\n`` only.

    Form feeds, vertical tabs and Unicode separators stay inside their line.
    A trailing terminator does not produce an extra empty line.
    """
    if not source:
        return []
    lines = _LINE_BREAK_RE.split(source)
    if lines[-1] == "":
        lines.pop()
    return lines


def load_content(path: Path) -> ContentBuffer:
    """Load ``path`` into a ``ContentBuffer`` with line terminators stripped.

    Raises ``FileOpenError`` when the path is missing, a directory, or
    unreadable.
    """
    if not path.exists():
        raise FileOpenError(path, "no such file")
    if path.is_dir():
        raise FileOpenError(path, "is a directory")
    try:
        source = read_text(path)
    except OSError as exc:
        raise FileOpenError(path, exc.strerror or str(exc)) from exc
    return ContentBuffer(split_lines(source))
