"""Matching engine: per-item scoring, batch ranking and bulk filtering."""

from .filtering import (
    PARALLEL_SCAN_THRESHOLD,
    filter_indices,
    fuzzy_match,
    parallel_filter,
    sequential_filter,
)
from .ranking import rank, rank_indices
from .scoring import (
    EXACT,
    MatchResult,
    fold_case,
    score_match,
    score_match_case_insensitive,
    score_match_with_original,
)

__all__ = [
    "EXACT",
    "MatchResult",
    "PARALLEL_SCAN_THRESHOLD",
    "filter_indices",
    "fold_case",
    "fuzzy_match",
    "parallel_filter",
    "rank",
    "rank_indices",
    "score_match",
    "score_match_case_insensitive",
    "score_match_with_original",
    "sequential_filter",
]
