"""Logging setup for the viewer.

Stdout carries the terminal frame, so records go to a file under the
platform log directory instead of the console.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "termview"
LOG_FILENAME = "termview.log"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(LOGGER_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(level: str = "WARNING", log_path: Path | None = None) -> logging.Logger:
    """Install one file handler on the package logger and return it.

    Calling again replaces the previous handler. When the log directory
    cannot be created the logger gets a ``NullHandler`` instead.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    path = log_path if log_path is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
