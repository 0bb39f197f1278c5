"""Lay out one finder frame into a screen buffer.

Row 0 holds the prompt and query, the following rows a window of filtered
items, and the last row (optionally) the key help line.
"""

from __future__ import annotations

from ..finder import FuzzyFinder
from ..ui_theme import DEFAULT_THEME, UITheme
from .buffer import ScreenBuffer

DEFAULT_PROMPT = "> "
SELECTED_MARKER = "✓ "
UNSELECTED_MARKER = "  "
TOO_SMALL_MESSAGE = "Terminal too small. Please resize to continue..."
SINGLE_SELECT_HELP = "↑/↓: Navigate | Enter: Select | Esc/Ctrl+C/Ctrl+Q: Exit"
MULTI_SELECT_HELP = "Tab/Space: Toggle | Enter: Confirm | Esc/Ctrl+C/Ctrl+Q: Exit"


def help_text(multi_select: bool) -> str:
    return MULTI_SELECT_HELP if multi_select else SINGLE_SELECT_HELP


def shows_help_row(height: int, show_help_text: bool) -> bool:
    """Help needs its own row below the prompt and at least one result row."""
    return show_help_text and height > 2


def visible_item_rows(height: int, show_help_text: bool) -> int:
    """Rows left for results after the prompt and optional help rows."""
    if height < 2:
        return 0
    reserved = 2 if shows_help_row(height, show_help_text) else 1
    return height - reserved


def adjust_scroll(cursor: int, scroll_offset: int, visible_rows: int, total: int) -> int:
    """Return a scroll offset that keeps ``cursor`` inside the visible window.

    Also repairs an offset left past the end after the list shrank.
    """
    if visible_rows <= 0:
        return 0
    if cursor < scroll_offset:
        scroll_offset = cursor
    elif cursor >= scroll_offset + visible_rows:
        scroll_offset = cursor - visible_rows + 1
    if scroll_offset > total:
        scroll_offset = max(0, total - visible_rows)
    return max(0, scroll_offset)


def _draw_prompt(
    buffer: ScreenBuffer,
    finder: FuzzyFinder,
    theme: UITheme,
    prompt: str,
) -> None:
    col = buffer.put_str(0, 0, prompt, fg=theme.prompt)
    col += buffer.put_str_plain(col, 0, finder.query)
    if not finder.multi_select:
        return
    counter = f"{len(finder.selected_indices)}/{len(finder.items)}"
    counter_col = buffer.width - len(counter)
    # Leave one blank column between the query and the counter.
    if counter_col > col:
        buffer.put_str(counter_col, 0, counter, fg=theme.counter)


def _draw_item(
    buffer: ScreenBuffer,
    row: int,
    item: str,
    *,
    is_cursor: bool,
    is_selected: bool,
    positions: tuple[int, ...],
    theme: UITheme,
) -> None:
    if is_cursor:
        base_fg, base_bg, base_bold = theme.cursor_fg, theme.cursor_bg, True
    else:
        base_fg, base_bg, base_bold = None, None, False

    if is_selected:
        col = buffer.put_str(0, row, SELECTED_MARKER, fg=theme.selected_marker, bg=base_bg)
    else:
        col = buffer.put_str(0, row, UNSELECTED_MARKER, fg=base_fg, bg=base_bg, bold=base_bold)

    matched = set(positions)
    for idx, ch in enumerate(item):
        if col >= buffer.width:
            break
        if idx in matched:
            fg = theme.cursor_match_fg if is_cursor else base_fg
            buffer.put_char(col, row, ch, fg=fg, bg=base_bg, bold=True, underline=True)
        else:
            buffer.put_char(col, row, ch, fg=base_fg, bg=base_bg, bold=base_bold)
        col += 1

    if is_cursor:
        while col < buffer.width:
            buffer.put_char(col, row, " ", fg=base_fg, bg=base_bg)
            col += 1


def paint_frame(
    buffer: ScreenBuffer,
    finder: FuzzyFinder,
    *,
    scroll_offset: int = 0,
    theme: UITheme = DEFAULT_THEME,
    prompt: str = DEFAULT_PROMPT,
    show_help_text: bool = True,
) -> None:
    """Clear ``buffer`` and draw the whole finder view into it."""
    buffer.clear()
    height = buffer.height
    if height <= 0:
        return
    if height < 2:
        buffer.put_str(0, 0, TOO_SMALL_MESSAGE, fg=theme.warning)
        return

    _draw_prompt(buffer, finder, theme, prompt)

    rows = visible_item_rows(height, show_help_text)
    visible = finder.filtered_items[scroll_offset : scroll_offset + rows]
    for offset, item in enumerate(visible):
        _draw_item(
            buffer,
            offset + 1,
            item,
            is_cursor=scroll_offset + offset == finder.cursor_position,
            is_selected=finder.is_selected(item),
            positions=finder.match_positions(item),
            theme=theme,
        )

    if shows_help_row(height, show_help_text):
        buffer.put_str(0, height - 1, help_text(finder.multi_select), fg=theme.help_dim)
