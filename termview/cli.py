"""Command-line front door for termview.

Parses the file argument, loads settings and content, then hands off to
the interactive runtime. File errors are fatal before raw mode is entered.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_settings
from .content import load_content
from .errors import FileOpenError
from .logs import configure_logging
from .runtime import create_session, run_viewer
from .terminal import create_terminal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termview",
        description="View a text file in the terminal with incremental search (Ctrl+F).",
    )
    parser.add_argument("path", help="Path to the file to view.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the viewer on one file.

    Exits with status 1 and a message on stderr when the file cannot be
    opened.
    """
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    path = Path(args.path)
    try:
        content = load_content(path)
    except FileOpenError as exc:
        logger.error("cannot open %s: %s", exc.path, exc.reason)
        raise SystemExit(f"\033[31mFile Open Error!\033[0m {exc}") from exc

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = create_terminal(stdin_fd, stdout_fd)
    state = create_session(content, terminal.get_window_size(), settings.status_label)
    run_viewer(state, terminal, stdin_fd, stdout_fd, settings.esc_timeout_ms)


if __name__ == "__main__":
    main()
