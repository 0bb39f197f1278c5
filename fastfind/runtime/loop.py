"""Main interactive event loop for the finder.

Owns terminal setup for a session, repaints the frame when state changes,
and routes key events to query editing and the key handler.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Iterable, Iterator
from concurrent.futures import Executor, ProcessPoolExecutor

from ..finder import FuzzyFinder
from ..input import ActionKind, edit_query, handle_key_event, read_key_event
from ..render.buffer import ScreenBuffer
from ..render.frame import adjust_scroll, paint_frame, visible_item_rows
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .config import FinderSettings
from .display import DisplayConfig

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
# Key reads wake up this often so terminal resizes get repainted.
RESIZE_POLL_MS = 100


def _fd_is_tty(stream) -> bool:
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        return False


@contextlib.contextmanager
def terminal_fds(stdin_fd: int | None = None, stdout_fd: int | None = None) -> Iterator[tuple[int, int]]:
    """Yield ``(input_fd, output_fd)`` bound to the controlling terminal.

    Missing descriptors default to stdin/stdout when they are ttys; otherwise
    ``/dev/tty`` is opened for the session and closed afterwards.
    """
    opened: int | None = None
    try:
        if stdin_fd is None and _fd_is_tty(sys.stdin):
            stdin_fd = sys.stdin.fileno()
        if stdout_fd is None and _fd_is_tty(sys.stdout):
            stdout_fd = sys.stdout.fileno()
        if stdin_fd is None or stdout_fd is None:
            opened = os.open(TTY_PATH, os.O_RDWR | os.O_NOCTTY)
            if stdin_fd is None:
                stdin_fd = opened
            if stdout_fd is None:
                stdout_fd = opened
        yield stdin_fd, stdout_fd
    finally:
        if opened is not None:
            os.close(opened)


@contextlib.contextmanager
def scan_pool(item_count: int, settings: FinderSettings) -> Iterator[Executor | None]:
    """Yield a worker pool that lives for the whole session.

    Lists at or below the parallel threshold never scan in parallel, so no
    pool is started for them and ``None`` is yielded.
    """
    if item_count <= settings.parallel_threshold:
        yield None
        return
    logger.debug("starting scan pool for %d items", item_count)
    with ProcessPoolExecutor(max_workers=settings.max_workers) as pool:
        yield pool


def _reserve_inline_rows(terminal: TerminalController, height: int, terminal_lines: int) -> int:
    """Make room for ``height`` rows below the cursor; return the first row used.

    When the view would run past the bottom, the terminal is scrolled and the
    view is anchored to the last ``height`` rows.
    """
    cursor_row = terminal.query_cursor_row()
    if cursor_row is None:
        cursor_row = max(0, terminal_lines - 1)
        logger.debug("no cursor position report; anchoring inline view at the bottom")
    if cursor_row + height <= terminal_lines:
        terminal.move_to_row(cursor_row)
        return cursor_row

    needed = cursor_row + height - terminal_lines
    terminal.move_to_row(terminal_lines - 1)
    terminal.write("\n" * needed)
    start_row = max(0, terminal_lines - height)
    terminal.move_to_row(start_row)
    return start_row


def _run_session(
    terminal: TerminalController,
    finder: FuzzyFinder,
    display: DisplayConfig,
    theme: UITheme,
    stdin_fd: int,
) -> list[str]:
    term = terminal.size()
    height = display.calculate_height(term.lines)
    start_row = 0
    if not display.fullscreen:
        start_row = _reserve_inline_rows(terminal, height, term.lines)
    buffer = ScreenBuffer(term.columns, height)
    last_size = (term.columns, term.lines)
    scroll_offset = 0
    dirty = True

    try:
        while True:
            term = terminal.size()
            if (term.columns, term.lines) != last_size:
                last_size = (term.columns, term.lines)
                dirty = True
            height = display.calculate_height(term.lines)
            if not display.fullscreen:
                start_row = min(start_row, max(0, term.lines - height))

            rows = visible_item_rows(height, display.show_help_text)
            new_scroll = adjust_scroll(finder.cursor_position, scroll_offset, rows, len(finder.filtered_items))
            if new_scroll != scroll_offset:
                scroll_offset = new_scroll
                dirty = True

            if dirty:
                buffer.resize(term.columns, height)
                paint_frame(
                    buffer,
                    finder,
                    scroll_offset=scroll_offset,
                    theme=theme,
                    prompt=display.prompt,
                    show_help_text=display.show_help_text,
                )
                terminal.write(buffer.render_fullscreen() if display.fullscreen else buffer.render(start_row))
                dirty = False

            try:
                event = read_key_event(stdin_fd, timeout_ms=RESIZE_POLL_MS)
            except KeyboardInterrupt:
                continue
            if event is None:
                continue

            if edit_query(event, finder):
                dirty = True
                continue
            action = handle_key_event(event, finder)
            if action.kind is ActionKind.EXIT:
                return []
            if action.kind is ActionKind.SELECT:
                return list(action.selected)
            dirty = True
    finally:
        if not display.fullscreen:
            terminal.clear_rows(start_row, buffer.height)


def run_tui(
    items: Iterable[str],
    multi_select: bool = False,
    display: DisplayConfig | None = None,
    settings: FinderSettings | None = None,
    theme: UITheme | None = None,
    initial_query: str = "",
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> list[str]:
    """Run one interactive finder session and return the chosen items.

    Returns an empty list when the user exits without selecting. The terminal
    is restored on every exit path, including exceptions.
    """
    display = display if display is not None else DisplayConfig()
    theme = theme if theme is not None else DEFAULT_THEME
    settings = settings if settings is not None else FinderSettings()
    items = tuple(items)
    logger.debug(
        "starting session: %d items, multi_select=%s, fullscreen=%s",
        len(items),
        multi_select,
        display.fullscreen,
    )

    with scan_pool(len(items), settings) as pool:
        finder = FuzzyFinder(items, multi_select=multi_select, settings=settings, executor=pool)
        if initial_query:
            finder.set_query(initial_query)
        with terminal_fds(stdin_fd, stdout_fd) as (in_fd, out_fd):
            terminal = TerminalController(in_fd, out_fd)
            with terminal.raw_mode(display.fullscreen):
                return _run_session(terminal, finder, display, theme, in_fd)
