"""Persistent JSON config helpers.

Holds the status-bar label, ESC disambiguation timeout and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .input import ESC_SEQUENCE_TIMEOUT_MS
from .state import DEFAULT_STATUS_LABEL

logger = logging.getLogger(__name__)

APP_NAME = "termview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_LOG_LEVEL = "WARNING"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ViewerSettings:
    status_label: str = DEFAULT_STATUS_LABEL
    esc_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        text = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("cannot read config %s: %s", CONFIG_PATH, exc)
        return {}
    try:
        data = json.loads(text)
    except ValueError as exc:
        logger.warning("ignoring malformed config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; the viewer never
    depends on being able to write its config.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _load_label(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_STATUS_LABEL
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STATUS_LABEL


def _load_timeout(value: object) -> int:
    """Booleans, non-integers and negatives fall back to the default."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return ESC_SEQUENCE_TIMEOUT_MS
    return value


def _load_log_level(value: object) -> str:
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


def load_settings() -> ViewerSettings:
    """Read config and validate each field, falling back per field."""
    data = load_config()
    return ViewerSettings(
        status_label=_load_label(data.get("status_label")),
        esc_timeout_ms=_load_timeout(data.get("esc_timeout_ms")),
        log_level=_load_log_level(data.get("log_level")),
    )
