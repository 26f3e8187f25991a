"""termview: a read-only terminal text viewer with incremental search.

``main`` is the CLI entrypoint; the viewer engine lives in the submodules.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
