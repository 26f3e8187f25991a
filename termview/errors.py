"""Exception taxonomy for the viewer.

Only the byte-read path and the file loader can fail; cursor, viewport and
search arithmetic clamp instead of raising.
"""

from __future__ import annotations


class TermviewError(Exception):
    """Base class for viewer errors."""


class KeyReadError(TermviewError):
    """Reading the next input byte failed."""


class FileOpenError(TermviewError):
    """The file to view could not be opened or read."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
