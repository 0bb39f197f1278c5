"""Tests for the cheap membership predicate and the scan dispatch.

The parallel scan must return exactly what the sequential scan returns.
"""

from __future__ import annotations

import unittest
from unittest import mock
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

from fastfind.search import filtering
from fastfind.search.filtering import (
    filter_indices,
    fuzzy_match,
    parallel_filter,
    sequential_filter,
)
from fastfind.search.scoring import score_match


def _corpus(count: int) -> list[str]:
    words = ["alpha", "beta_gamma", "src/app/main.py", "README.md", "delta-epsilon", "zz"]
    return [f"{words[idx % len(words)]}_{idx}".lower() for idx in range(count)]


class FuzzyMatchTests(unittest.TestCase):
    def test_substring_and_subsequence_match(self) -> None:
        self.assertTrue(fuzzy_match("hello", "ell"))
        self.assertTrue(fuzzy_match("hello", "hlo"))
        self.assertTrue(fuzzy_match("hello", ""))

    def test_out_of_order_does_not_match(self) -> None:
        self.assertFalse(fuzzy_match("hello", "ol"))
        self.assertFalse(fuzzy_match("", "a"))
        self.assertFalse(fuzzy_match("ab", "abb"))

    def test_agrees_with_scorer_on_membership(self) -> None:
        corpus = _corpus(60) + ["a-b-a-b", "mississippi", "fooBar".lower()]
        for query in ("a", "ab", "msp", "zz_1", "py", "xyz", "ssi", "rd"):
            for item in corpus:
                with self.subTest(item=item, query=query):
                    self.assertEqual(fuzzy_match(item, query), score_match(item, query) is not None)


class ScanTests(unittest.TestCase):
    def test_sequential_returns_indices_in_order(self) -> None:
        items = ["apple", "banana", "grape", "pineapple"]
        self.assertEqual(sequential_filter(items, "ap"), [0, 2, 3])

    def test_parallel_matches_sequential_on_a_shared_process_pool(self) -> None:
        items = _corpus(5_000)
        with ProcessPoolExecutor(max_workers=2) as executor:
            for query in ("a", "md", "main", "_4", "zzz", ""):
                with self.subTest(query=query):
                    self.assertEqual(
                        parallel_filter(items, query, max_workers=2, executor=executor),
                        sequential_filter(items, query),
                    )

    def test_parallel_without_executor_uses_a_one_off_pool(self) -> None:
        items = _corpus(3_000)
        self.assertEqual(parallel_filter(items, "main", max_workers=2), sequential_filter(items, "main"))

    def test_parallel_uses_supplied_executor(self) -> None:
        items = _corpus(2_000)
        with ThreadPoolExecutor(max_workers=3) as executor:
            result = parallel_filter(items, "beta", executor=executor, max_workers=3)
        self.assertEqual(result, sequential_filter(items, "beta"))

    def test_filter_indices_passes_executor_to_parallel_scan(self) -> None:
        items = _corpus(50)
        with ThreadPoolExecutor(max_workers=2) as executor:
            with mock.patch.object(executor, "submit", wraps=executor.submit) as submit:
                indices, used_parallel = filter_indices(
                    items, "beta", parallel_threshold=10, max_workers=2, executor=executor
                )
        self.assertTrue(used_parallel)
        self.assertTrue(submit.called)
        self.assertEqual(indices, sequential_filter(items, "beta"))

    def test_parallel_on_empty_input(self) -> None:
        self.assertEqual(parallel_filter([], "a"), [])

    def test_chunk_bounds_cover_range_contiguously(self) -> None:
        for total, workers in ((0, 4), (10, 4), (1_000, 3), (10_000, 7)):
            bounds = filtering._chunk_bounds(total, workers)
            covered = [idx for start, stop in bounds for idx in range(start, stop)]
            self.assertEqual(covered, list(range(total)))

    def test_filter_indices_switches_on_threshold(self) -> None:
        items = _corpus(20)
        indices, used_parallel = filter_indices(items, "a", parallel_threshold=10, max_workers=2)
        self.assertTrue(used_parallel)
        self.assertEqual(indices, sequential_filter(items, "a"))

        indices, used_parallel = filter_indices(items, "a", parallel_threshold=20)
        self.assertFalse(used_parallel)
        self.assertEqual(indices, sequential_filter(items, "a"))


if __name__ == "__main__":
    unittest.main()
