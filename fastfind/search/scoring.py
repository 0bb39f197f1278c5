"""Fuzzy match scoring for one item against one query.

Matches query characters in order and reports the matched positions so the
renderer can highlight them. Exact, prefix and substring hits take fast paths;
everything else runs a small dynamic program over candidate positions that
favors consecutive runs, word boundaries and early matches.
"""

from __future__ import annotations

from dataclasses import dataclass

EXACT = 10_000
PREFIX = 5_000
CONSECUTIVE = 40
BOUNDARY = 30
FIRST_CHAR = 20
MATCH = 16
GAP_START = -3
GAP_EXTEND = -1
GAP_MAX = -20

POSITION_BONUS_CAP = 20
SUBSTRING_POSITION_BONUS_CAP = 100
LENGTH_PENALTY_CAP = 50

BOUNDARY_CHARS = frozenset("/\\_-. :")


@dataclass(frozen=True)
class MatchResult:
    """Score plus matched character indices (strictly increasing)."""

    score: int
    positions: tuple[int, ...] = ()


EMPTY_MATCH = MatchResult(score=0, positions=())


def fold_case(text: str) -> str:
    """Lowercase ``text`` one character at a time, keeping its length.

    Characters whose lowercase form is longer (``"İ"``) keep only its first
    code point, so an index into the result is an index into ``text``.
    """
    if text.isascii():
        return text.lower()
    return "".join(ch.lower()[0] for ch in text)


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_word_boundary(prev: str | None, current: str) -> bool:
    """Return whether ``current`` starts a word given the character before it.

    The item start, separators, lower→upper camelCase steps and digit/non-digit
    transitions all count as boundaries.
    """
    if prev is None:
        return True
    if prev in BOUNDARY_CHARS:
        return True
    if "a" <= prev <= "z" and "A" <= current <= "Z":
        return True
    return _is_ascii_digit(prev) != _is_ascii_digit(current)


def _position_bonus(item_len: int, pos: int) -> int:
    return min(item_len - pos, POSITION_BONUS_CAP)


def find_optimal_positions(item: str, query: str) -> list[int] | None:
    """Choose one increasing item index per query character.

    Candidate lists are built in ascending item order and every comparison is
    strict, so ties always resolve to the earliest candidate.
    """
    n = len(item)
    m = len(query)
    if m == 0:
        return []
    if n < m:
        return None

    candidates: list[list[int]] = []
    for qc in query:
        positions = [idx for idx, ic in enumerate(item) if ic == qc]
        if not positions:
            return None
        candidates.append(positions)

    first = candidates[0]
    if m == 1:
        return [first[0]]

    dp: list[int | None] = []
    for pos in first:
        score = MATCH + FIRST_CHAR + _position_bonus(n, pos)
        if pos == 0:
            score += BOUNDARY
        dp.append(score)
    back: list[list[int]] = [[-1] * len(first)]

    for qi in range(1, m):
        prev_positions = candidates[qi - 1]
        curr_positions = candidates[qi]
        new_dp: list[int | None] = [None] * len(curr_positions)
        new_back = [-1] * len(curr_positions)
        for cj, curr_pos in enumerate(curr_positions):
            best = new_dp[cj]
            for pj, prev_pos in enumerate(prev_positions):
                if prev_pos >= curr_pos:
                    break
                prev_score = dp[pj]
                if prev_score is None:
                    continue
                step = MATCH
                if curr_pos == prev_pos + 1:
                    step += CONSECUTIVE
                else:
                    gap = curr_pos - prev_pos - 1
                    step += GAP_START + max(gap * GAP_EXTEND, GAP_MAX)
                step += _position_bonus(n, curr_pos)
                total = prev_score + step
                if best is None or total > best:
                    best = total
                    new_back[cj] = pj
            new_dp[cj] = best
        dp = new_dp
        back.append(new_back)

    best_idx = -1
    best_score: int | None = None
    for idx, score in enumerate(dp):
        if score is None:
            continue
        if best_score is None or score > best_score:
            best_score = score
            best_idx = idx
    if best_score is None:
        return None

    selected = [0] * m
    current = best_idx
    for qi in range(m - 1, -1, -1):
        selected[qi] = candidates[qi][current]
        current = back[qi][current]
    return selected


def score_positions(positions: list[int], item: str, original: str, query: str) -> int:
    """Score a chosen set of positions; used after the DP picked them."""
    if not positions:
        return 0

    n = len(item)
    score = 0
    prev_pos: int | None = None
    in_gap = False
    for qi, pos in enumerate(positions):
        score += MATCH
        if qi == 0:
            score += FIRST_CHAR
            if pos == 0:
                score += BOUNDARY

        if prev_pos is not None:
            if pos == prev_pos + 1:
                score += CONSECUTIVE
                in_gap = False
            else:
                if not in_gap:
                    score += GAP_START
                    in_gap = True
                gap = pos - prev_pos - 1
                score += max(gap * GAP_EXTEND, GAP_MAX)

        prev_char = original[pos - 1] if 0 < pos <= len(original) else None
        current_char = original[pos] if pos < len(original) else query[qi]
        if is_word_boundary(prev_char, current_char):
            score += BOUNDARY

        score += _position_bonus(n, pos)
        prev_pos = pos

    score -= min(n - len(query), LENGTH_PENALTY_CAP)
    return score


def score_match_with_original(item_lower: str, item_original: str, query: str) -> MatchResult | None:
    """Score ``query`` against an item.

    ``item_lower`` and ``query`` must already be folded with ``fold_case``;
    ``item_original`` keeps the case information needed for camelCase
    boundaries. Returns ``None`` when the query is not an in-order
    subsequence of the item.
    """
    if not query:
        return EMPTY_MATCH
    item = item_lower
    if not item:
        return None

    query_len = len(query)
    if item == query:
        return MatchResult(EXACT, tuple(range(len(item))))

    if item.startswith(query):
        return MatchResult(PREFIX + query_len * CONSECUTIVE, tuple(range(query_len)))

    start = item.find(query)
    if start >= 0:
        position_bonus = min((len(item) - start) * 2, SUBSTRING_POSITION_BONUS_CAP)
        score = PREFIX // 2 + query_len * CONSECUTIVE + position_bonus
        return MatchResult(score, tuple(range(start, start + query_len)))

    positions = find_optimal_positions(item, query)
    if positions is None:
        return None
    score = score_positions(positions, item, item_original, query)
    return MatchResult(score, tuple(positions))


def score_match(item: str, query: str) -> MatchResult | None:
    """Score already-lowercased input (no camelCase information)."""
    return score_match_with_original(item, item, query)


def score_match_case_insensitive(item: str, query: str) -> MatchResult | None:
    """Lowercase both sides while keeping ``item`` for boundary detection."""
    return score_match_with_original(fold_case(item), item, fold_case(query))
