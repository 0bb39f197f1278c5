"""Public runtime entry points.

Groups the interactive session (`run_tui`), display-mode policy and the
persisted settings layer used by the CLI and tests.
"""

from __future__ import annotations

from .config import FinderSettings
from .display import DisplayConfig


def run_tui(*args, **kwargs):
    """Lazily import the session runner to avoid package-import cycles."""
    from .loop import run_tui as _run_tui

    return _run_tui(*args, **kwargs)


__all__ = ["DisplayConfig", "FinderSettings", "run_tui"]
