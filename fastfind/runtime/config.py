"""Persistent JSON config helpers.

Stores matching settings, the UI theme name, and help-line visibility.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..search.filtering import PARALLEL_SCAN_THRESHOLD

logger = logging.getLogger(__name__)

APP_NAME = "fastfind"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class FinderSettings:
    """Tunables for how the finder filters and orders results.

    ``max_workers`` of ``None`` lets the process pool pick its default size.
    """

    parallel_threshold: int = PARALLEL_SCAN_THRESHOLD
    cache_queries: bool = True
    rank_results: bool = False
    max_workers: int | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception as exc:
        logger.debug("config not loaded from %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("config at %s is not a JSON object; ignoring", CONFIG_PATH)
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.debug("config not saved to %s: %s", CONFIG_PATH, exc)


def _coerce_positive_int(value: object) -> int | None:
    """Accept strictly positive integers only; booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _coerce_bool(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


def load_finder_settings() -> FinderSettings:
    """Build ``FinderSettings`` from config, keeping defaults for invalid keys."""
    data = load_config()
    defaults = FinderSettings()

    threshold = _coerce_positive_int(data.get("parallel_threshold"))
    cache_queries = _coerce_bool(data.get("cache_queries"))
    rank_results = _coerce_bool(data.get("rank_results"))
    return FinderSettings(
        parallel_threshold=defaults.parallel_threshold if threshold is None else threshold,
        cache_queries=defaults.cache_queries if cache_queries is None else cache_queries,
        rank_results=defaults.rank_results if rank_results is None else rank_results,
        max_workers=_coerce_positive_int(data.get("max_workers")),
    )


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_show_help_text() -> bool:
    """Return persisted help-line visibility; only booleans count, default ``True``."""
    value = load_config().get("show_help_text")
    return value if isinstance(value, bool) else True
