"""Batch scoring and ordering of items against a query."""

from __future__ import annotations

from collections.abc import Sequence

from .scoring import EMPTY_MATCH, MatchResult, fold_case, score_match_with_original


def rank(items: Sequence[str], query: str) -> list[tuple[int, MatchResult]]:
    """Score every item and return ``(index, result)`` pairs, best first.

    An empty query keeps all items in their original order with score 0.
    Non-matching items are dropped; equal scores keep original order.
    """
    if not query:
        return [(idx, EMPTY_MATCH) for idx in range(len(items))]

    query_lower = fold_case(query)
    results: list[tuple[int, MatchResult]] = []
    for idx, item in enumerate(items):
        result = score_match_with_original(fold_case(item), item, query_lower)
        if result is not None:
            results.append((idx, result))
    results.sort(key=lambda pair: -pair[1].score)
    return results


def rank_indices(
    indices: Sequence[int],
    items: Sequence[str],
    lowercase_items: Sequence[str],
    query_lower: str,
) -> list[int]:
    """Reorder a pre-filtered index list by score using cached lowercase text.

    Indices whose item no longer scores are kept at the end in their original
    order so filtering and ranking never disagree on membership.
    """
    scored: list[tuple[int, int]] = []
    unscored: list[int] = []
    for idx in indices:
        result = score_match_with_original(lowercase_items[idx], items[idx], query_lower)
        if result is None:
            unscored.append(idx)
            continue
        scored.append((result.score, idx))
    scored.sort(key=lambda pair: -pair[0])
    return [idx for _, idx in scored] + unscored
