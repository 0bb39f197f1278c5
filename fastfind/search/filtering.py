"""Cheap membership test and the sequential/parallel scans built on it.

The scan only decides which items match; scoring and highlighting live in
``scoring``. Both scan paths return indices in original order so the choice
between them never changes results.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor

PARALLEL_SCAN_THRESHOLD = 1_000
_MIN_CHUNK_SIZE = 1_024


def fuzzy_match(item: str, query: str) -> bool:
    """Return whether ``query`` is a substring or in-order subsequence of ``item``."""
    if not query:
        return True
    if query in item:
        return True
    remaining = iter(item)
    return all(ch in remaining for ch in query)


def _scan_chunk(lowercase_items: Sequence[str], query_lower: str, offset: int) -> list[int]:
    return [offset + idx for idx, item in enumerate(lowercase_items) if fuzzy_match(item, query_lower)]


def sequential_filter(lowercase_items: Sequence[str], query_lower: str) -> list[int]:
    """Scan items in index order on the calling thread."""
    return _scan_chunk(lowercase_items, query_lower, 0)


def _chunk_bounds(total: int, workers: int) -> list[tuple[int, int]]:
    chunk_size = max(_MIN_CHUNK_SIZE, -(-total // max(1, workers)))
    return [(start, min(total, start + chunk_size)) for start in range(0, total, chunk_size)]


def parallel_filter(
    lowercase_items: Sequence[str],
    query_lower: str,
    *,
    max_workers: int | None = None,
    executor: Executor | None = None,
) -> list[int]:
    """Scan contiguous chunks concurrently and concatenate them in chunk order.

    Each worker receives a copy of its slice plus the slice offset and returns
    global indices, so nothing is shared. A caller-supplied ``executor`` (the
    session pool) is used as-is and left open; otherwise a process pool is
    created for this one scan.
    """
    if not lowercase_items:
        return []

    workers = max_workers or default_worker_count()
    if executor is None:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            return _fan_out(pool, lowercase_items, query_lower, workers)
    return _fan_out(executor, lowercase_items, query_lower, workers)


def default_worker_count() -> int:
    """Match the process pool's own default sizing."""
    return os.cpu_count() or 1


def _fan_out(executor: Executor, lowercase_items: Sequence[str], query_lower: str, workers: int) -> list[int]:
    futures = [
        executor.submit(_scan_chunk, lowercase_items[start:stop], query_lower, start)
        for start, stop in _chunk_bounds(len(lowercase_items), workers)
    ]
    matched: list[int] = []
    for future in futures:
        matched.extend(future.result())
    return matched


def filter_indices(
    lowercase_items: Sequence[str],
    query_lower: str,
    *,
    parallel_threshold: int = PARALLEL_SCAN_THRESHOLD,
    max_workers: int | None = None,
    executor: Executor | None = None,
) -> tuple[list[int], bool]:
    """Pick the scan path by list size; returns ``(indices, used_parallel)``."""
    if len(lowercase_items) > parallel_threshold:
        indices = parallel_filter(lowercase_items, query_lower, max_workers=max_workers, executor=executor)
        return indices, True
    return sequential_filter(lowercase_items, query_lower), False
