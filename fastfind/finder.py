"""Selection state for one finder session.

Owns the item list, the filtered view, cursor, selection and the per-query
filter cache. Every operation is total: out-of-range moves clamp or no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Executor

from .runtime.config import FinderSettings
from .search.filtering import filter_indices
from .search.ranking import rank_indices
from .search.scoring import fold_case, score_match_with_original

logger = logging.getLogger(__name__)


class FuzzyFinder:
    """Filtered view over an immutable item list plus cursor and selection."""

    def __init__(
        self,
        items: Iterable[str],
        multi_select: bool = False,
        settings: FinderSettings | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.items: tuple[str, ...] = tuple(items)
        self.lowercase_items: tuple[str, ...] = tuple(fold_case(item) for item in self.items)
        self.filtered_items: list[str] = list(self.items)
        self.query = ""
        self.cursor_position = 0
        self.selected_indices: list[int] = []
        self.multi_select = multi_select
        self.settings = settings if settings is not None else FinderSettings()
        self.query_cache: dict[str, list[str]] = {}
        # Session worker pool for parallel scans; None means one pool per scan.
        self.executor = executor

    # filtering
    def update_filter(self) -> None:
        """Recompute ``filtered_items`` for the current query and clamp the cursor."""
        if not self.query:
            self.filtered_items = list(self.items)
        else:
            cached = self.query_cache.get(self.query) if self.settings.cache_queries else None
            if cached is not None:
                logger.debug("filter cache hit for %r (%d results)", self.query, len(cached))
                self.filtered_items = cached
            else:
                self.filtered_items = self._scan(self.query)
                if self.settings.cache_queries:
                    self.query_cache[self.query] = self.filtered_items
        self._clamp_cursor()

    def _scan(self, query: str) -> list[str]:
        query_lower = fold_case(query)
        indices, used_parallel = filter_indices(
            self.lowercase_items,
            query_lower,
            parallel_threshold=self.settings.parallel_threshold,
            max_workers=self.settings.max_workers,
            executor=self.executor,
        )
        logger.debug(
            "filter cache miss for %r: %s scan over %d items, %d matched",
            query,
            "parallel" if used_parallel else "sequential",
            len(self.items),
            len(indices),
        )
        if self.settings.rank_results:
            indices = rank_indices(indices, self.items, self.lowercase_items, query_lower)
        return [self.items[idx] for idx in indices]

    def _clamp_cursor(self) -> None:
        if not self.filtered_items:
            self.cursor_position = 0
        elif self.cursor_position >= len(self.filtered_items):
            self.cursor_position = len(self.filtered_items) - 1
        elif self.cursor_position < 0:
            self.cursor_position = 0

    # query editing
    def set_query(self, query: str) -> None:
        self.query = query
        self.update_filter()

    def push_query_char(self, ch: str) -> None:
        self.set_query(self.query + ch)

    def pop_query_char(self) -> None:
        """Drop the last query character; no-op on an empty query."""
        if not self.query:
            return
        self.set_query(self.query[:-1])

    def clear_query(self) -> None:
        if self.query:
            self.set_query("")

    # cursor
    def move_cursor(self, delta: int) -> None:
        """Move the cursor by ``delta`` rows, wrapping around either end."""
        count = len(self.filtered_items)
        if count == 0:
            return
        self.cursor_position = (self.cursor_position + delta) % count

    def move_cursor_clamped(self, delta: int) -> None:
        """Move the cursor by ``delta`` rows, stopping at the first/last row."""
        count = len(self.filtered_items)
        if count == 0:
            return
        self.cursor_position = max(0, min(count - 1, self.cursor_position + delta))

    def current_item(self) -> str | None:
        if not self.filtered_items:
            return None
        return self.filtered_items[self.cursor_position]

    # selection
    def toggle_selection(self) -> None:
        """Flip selection of the item under the cursor (multi-select only).

        Duplicate item strings resolve to their first index in ``items``.
        """
        if not self.multi_select:
            return
        item = self.current_item()
        if item is None:
            return
        try:
            index = self.items.index(item)
        except ValueError:
            return
        if index in self.selected_indices:
            self.selected_indices.remove(index)
        else:
            self.selected_indices.append(index)

    def is_selected(self, item: str) -> bool:
        return any(self.items[index] == item for index in self.selected_indices)

    def get_selected_items(self) -> list[str]:
        """Return selected items in selection order, or the cursor item in single-select."""
        if self.multi_select:
            return [self.items[index] for index in self.selected_indices]
        item = self.current_item()
        return [] if item is None else [item]

    # highlighting
    def match_positions(self, item: str) -> tuple[int, ...]:
        """Character indices of ``item`` matched by the current query."""
        if not self.query:
            return ()
        result = score_match_with_original(fold_case(item), item, fold_case(self.query))
        return () if result is None else result.positions
