"""Interactive session tests driven by scripted key bytes over a pipe.

The terminal controller is replaced with a recording fake so the loop can run
without a tty while still decoding real input bytes.
"""

from __future__ import annotations

import os
import unittest
from concurrent.futures import ProcessPoolExecutor
from contextlib import contextmanager
from unittest import mock

from fastfind.input import reader as reader_mod
from fastfind.runtime.config import FinderSettings
from fastfind.runtime.display import DisplayConfig
from fastfind.runtime.loop import run_tui
from fastfind.search.filtering import filter_indices


class _FakeTerminal:
    def __init__(self, columns: int = 40, lines: int = 10, cursor_row: int | None = 0) -> None:
        self.columns = columns
        self.lines = lines
        self.cursor_row = cursor_row
        self.writes: list[str] = []
        self.modes: list[object] = []
        self.cleared: list[tuple[int, int]] = []

    @contextmanager
    def raw_mode(self, fullscreen: bool = True):
        self.modes.append(fullscreen)
        try:
            yield
        finally:
            self.modes.append("restored")

    def size(self) -> os.terminal_size:
        return os.terminal_size((self.columns, self.lines))

    def query_cursor_row(self) -> int | None:
        return self.cursor_row

    def move_to_row(self, row: int) -> None:
        self.writes.append(f"\x1b[{row + 1};1H")

    def write(self, text: str) -> None:
        self.writes.append(text)

    def clear_rows(self, start_row: int, count: int) -> None:
        self.cleared.append((start_row, count))


class RunTuiTests(unittest.TestCase):
    def setUp(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader_mod._PENDING_BYTES.clear()

    def _run(self, keys: bytes, terminal: _FakeTerminal | None = None, **kwargs) -> tuple[list[str], _FakeTerminal]:
        terminal = terminal if terminal is not None else _FakeTerminal()
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, keys)
            with mock.patch("fastfind.runtime.loop.TerminalController", return_value=terminal):
                result = run_tui(stdin_fd=read_fd, stdout_fd=write_fd, **kwargs)
        finally:
            os.close(read_fd)
            os.close(write_fd)
        return result, terminal

    def test_type_query_and_select(self) -> None:
        result, terminal = self._run(b"ban\r", items=["apple", "banana", "cherry"])
        self.assertEqual(result, ["banana"])
        self.assertEqual(terminal.modes, [True, "restored"])
        self.assertTrue(terminal.writes[0].startswith("\x1b[H\x1b[2J"))
        self.assertIn("ban", terminal.writes[-1])

    def test_escape_exits_without_selection(self) -> None:
        result, terminal = self._run(b"\x1b", items=["apple"])
        self.assertEqual(result, [])
        self.assertEqual(terminal.modes, [True, "restored"])

    def test_ctrl_c_exits(self) -> None:
        result, _ = self._run(b"\x03", items=["apple"])
        self.assertEqual(result, [])

    def test_enter_with_no_results_keeps_running(self) -> None:
        result, _ = self._run(b"zz\r\x7f\x7f\r", items=["apple", "banana"])
        self.assertEqual(result, ["apple"])

    def test_ctrl_u_clears_query_mid_session(self) -> None:
        result, _ = self._run(b"zz\x15\r", items=["apple", "banana"])
        self.assertEqual(result, ["apple"])

    def test_navigation_wraps_to_last_item(self) -> None:
        result, _ = self._run(b"\x1b[A\r", items=["apple", "banana", "cherry"])
        self.assertEqual(result, ["cherry"])

    def test_multi_select_session(self) -> None:
        result, _ = self._run(
            b" \x1b[B\x1b[B \r",
            items=["apple", "banana", "cherry"],
            multi_select=True,
        )
        self.assertEqual(result, ["apple", "cherry"])

    def test_initial_query_filters_before_first_frame(self) -> None:
        result, terminal = self._run(b"\r", items=["apple", "cherry"], initial_query="ch")
        self.assertEqual(result, ["cherry"])
        self.assertNotIn("apple", terminal.writes[0])

    def test_ranked_settings_are_applied(self) -> None:
        result, _ = self._run(
            b"abc\r",
            items=["xxabc", "abc"],
            settings=FinderSettings(rank_results=True),
        )
        self.assertEqual(result, ["abc"])

    def test_large_lists_scan_on_one_pool_for_the_whole_session(self) -> None:
        items = ["apple", "banana", "cherry", "chive", "date", "peach"]
        with mock.patch("fastfind.runtime.loop.ProcessPoolExecutor", wraps=ProcessPoolExecutor) as pool_cls:
            with mock.patch("fastfind.finder.filter_indices", wraps=filter_indices) as scan:
                result, _ = self._run(
                    b"ch\x1b[B\r",
                    items=items,
                    settings=FinderSettings(parallel_threshold=3, max_workers=2),
                )
        self.assertEqual(result, ["chive"])
        pool_cls.assert_called_once_with(max_workers=2)
        pools = {id(call.kwargs["executor"]) for call in scan.call_args_list}
        self.assertEqual(len(scan.call_args_list), 2)
        self.assertEqual(len(pools), 1)
        self.assertIsInstance(scan.call_args_list[0].kwargs["executor"], ProcessPoolExecutor)

    def test_small_lists_start_no_pool(self) -> None:
        with mock.patch("fastfind.runtime.loop.ProcessPoolExecutor") as pool_cls:
            result, _ = self._run(b"ch\r", items=["apple", "cherry"])
        self.assertEqual(result, ["cherry"])
        pool_cls.assert_not_called()

    def test_inline_mode_scrolls_to_make_room_and_clears_rows(self) -> None:
        terminal = _FakeTerminal(columns=30, lines=10, cursor_row=8)
        result, terminal = self._run(
            b"\r",
            terminal=terminal,
            items=["apple"],
            display=DisplayConfig.with_height(4),
        )
        self.assertEqual(result, ["apple"])
        self.assertEqual(terminal.modes, [False, "restored"])
        self.assertIn("\n\n", terminal.writes)
        frames = [text for text in terminal.writes if "\x1b[2K" in text]
        self.assertTrue(frames[0].startswith("\x1b[7;1H\x1b[2K"))
        self.assertEqual(terminal.cleared, [(6, 4)])

    def test_inline_mode_without_scrolling(self) -> None:
        terminal = _FakeTerminal(columns=30, lines=10, cursor_row=2)
        _, terminal = self._run(
            b"\x1b",
            terminal=terminal,
            items=["apple"],
            display=DisplayConfig.with_height(3),
        )
        self.assertEqual(terminal.cleared, [(2, 3)])

    def test_terminal_is_restored_when_painting_fails(self) -> None:
        terminal = _FakeTerminal()
        with mock.patch("fastfind.runtime.loop.paint_frame", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                self._run(b"", terminal=terminal, items=["apple"])
        self.assertEqual(terminal.modes, [True, "restored"])


if __name__ == "__main__":
    unittest.main()
