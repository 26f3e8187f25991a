"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into integer key values.
Plain bytes pass through unchanged; escape sequences from different
terminal conventions normalize to semantic keys at values >= 1000.
"""

from __future__ import annotations

import logging
import os
import select
import sys

from .errors import KeyReadError

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 25

ERROR = -1
EOF = -2

ENTER = 13
ESC = 27
BACKSPACE = 127

ARROW_UP = 1000
ARROW_DOWN = 1001
ARROW_LEFT = 1002
ARROW_RIGHT = 1003
HOME = 1004
END = 1005
PAGE_UP = 1006
PAGE_DOWN = 1007
DELETE = 1008

NAVIGATION_KEYS = frozenset(
    {ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT, HOME, END, PAGE_UP, PAGE_DOWN}
)

_CSI_LETTERS = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME,
    ord("F"): END,
}

# ESC [ <digit> ~
_CSI_TILDE_DIGITS = {
    ord("1"): HOME,
    ord("7"): HOME,
    ord("4"): END,
    ord("8"): END,
    ord("3"): DELETE,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
}

# ESC O <letter>
_SS3_LETTERS = {
    ord("H"): HOME,
    ord("F"): END,
}

_KEY_NAMES = {
    ERROR: "ERROR",
    EOF: "EOF",
    ENTER: "ENTER",
    ESC: "ESC",
    BACKSPACE: "BACKSPACE",
    ARROW_UP: "UP",
    ARROW_DOWN: "DOWN",
    ARROW_LEFT: "LEFT",
    ARROW_RIGHT: "RIGHT",
    HOME: "HOME",
    END: "END",
    PAGE_UP: "PAGE_UP",
    PAGE_DOWN: "PAGE_DOWN",
    DELETE: "DELETE",
}


def ctrl(ch: str) -> int:
    """Key value produced by Ctrl + ``ch``."""
    return ord(ch) & 0x1F


def key_name(key: int) -> str:
    """Readable token for ``key``, used in debug logging."""
    if key in _KEY_NAMES:
        return _KEY_NAMES[key]
    if 1 <= key <= 26:
        return f"CTRL_{chr(key + 64)}"
    if 32 <= key < 127:
        return repr(chr(key))
    return str(key)


def _read_byte(fd: int) -> int | None:
    try:
        ch = os.read(fd, 1)
    except OSError as exc:
        raise KeyReadError(f"read from fd {fd} failed: {exc}") from exc
    if not ch:
        return None
    return ch[0]


def _read_ready_byte(fd: int, timeout_ms: int | None) -> int | None:
    """Read one follow-up byte, waiting at most ``timeout_ms`` when given."""
    if timeout_ms is not None:
        try:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        except (OSError, ValueError) as exc:
            raise KeyReadError(f"select on fd {fd} failed: {exc}") from exc
        if not ready:
            return None
    return _read_byte(fd)


def _decode_escape(fd: int, timeout_ms: int | None) -> int:
    second = _read_ready_byte(fd, timeout_ms)
    if second is None:
        return ESC
    if second != ord("[") and second != ord("O"):
        return second

    third = _read_ready_byte(fd, timeout_ms)
    if third is None:
        return ESC

    if second == ord("O"):
        return _SS3_LETTERS.get(third, third)

    if third in _CSI_LETTERS:
        return _CSI_LETTERS[third]
    if ord("0") <= third <= ord("9"):
        fourth = _read_ready_byte(fd, timeout_ms)
        if fourth is None:
            return ESC
        if fourth != ord("~"):
            return fourth
        return _CSI_TILDE_DIGITS.get(third, third)
    return third


def _report_read_error(exc: KeyReadError) -> None:
    logger.error("key read failed", exc_info=exc)
    sys.stderr.write("\033[31mRead Key Error!\033[m\r\n")
    sys.stderr.flush()


def read_key(fd: int, esc_timeout_ms: int | None = ESC_SEQUENCE_TIMEOUT_MS) -> int:
    """Block for the next key on ``fd`` and return exactly one key value.

    Bytes following an ESC introducer are awaited for ``esc_timeout_ms`` so a
    lone Escape press is still reported as ``ESC``; pass ``None`` to read the
    whole sequence synchronously. A failed read is reported and returned as
    ``ERROR``; a closed source returns ``EOF``.
    """
    try:
        first = _read_byte(fd)
        if first is None:
            return EOF
        if first != ESC:
            return first
        return _decode_escape(fd, esc_timeout_ms)
    except KeyReadError as exc:
        _report_read_error(exc)
        return ERROR
