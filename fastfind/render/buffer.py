"""In-memory cell grid serialized to one escape-sequence string per frame.

Drawing never touches the terminal; the runtime writes the string returned by
``render``/``render_fullscreen`` in a single call so frames do not flicker.
"""

from __future__ import annotations

from dataclasses import dataclass

from .colors import BOLD, CSI, RESET, UNDERLINE, TermColor, bg_sgr, fg_sgr


@dataclass(frozen=True)
class Cell:
    """One character position and its style."""

    char: str = " "
    fg: TermColor | None = None
    bg: TermColor | None = None
    bold: bool = False
    underline: bool = False


DEFAULT_CELL = Cell()


class ScreenBuffer:
    """Row-major ``width x height`` grid of cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.cells: list[Cell] = [DEFAULT_CELL] * (self.width * self.height)

    def clear(self) -> None:
        self.cells = [DEFAULT_CELL] * (self.width * self.height)

    def resize(self, width: int, height: int) -> None:
        """Reallocate (blanking content) only when dimensions change."""
        width = max(0, width)
        height = max(0, height)
        if width == self.width and height == self.height:
            return
        self.width = width
        self.height = height
        self.clear()

    def _index(self, x: int, y: int) -> int | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return None

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Store ``cell`` at ``(x, y)``; out-of-bounds writes are dropped."""
        idx = self._index(x, y)
        if idx is not None:
            self.cells[idx] = cell

    def get_cell(self, x: int, y: int) -> Cell | None:
        idx = self._index(x, y)
        return None if idx is None else self.cells[idx]

    def put_str(
        self,
        x: int,
        y: int,
        text: str,
        fg: TermColor | None = None,
        bg: TermColor | None = None,
        bold: bool = False,
        underline: bool = False,
    ) -> int:
        """Write ``text`` left to right from ``(x, y)``; return cells written.

        Writing stops at the right edge. Characters left of column 0 are
        skipped and not counted.
        """
        if not 0 <= y < self.height:
            return 0
        written = 0
        row_start = y * self.width
        for offset, ch in enumerate(text):
            cell_x = x + offset
            if cell_x >= self.width:
                break
            if cell_x < 0:
                continue
            self.cells[row_start + cell_x] = Cell(ch, fg, bg, bold, underline)
            written += 1
        return written

    def put_str_plain(self, x: int, y: int, text: str) -> int:
        return self.put_str(x, y, text)

    def put_char(
        self,
        x: int,
        y: int,
        ch: str,
        fg: TermColor | None = None,
        bg: TermColor | None = None,
        bold: bool = False,
        underline: bool = False,
    ) -> None:
        self.set_cell(x, y, Cell(ch, fg, bg, bold, underline))

    def render(self, start_row: int = 0) -> str:
        """Serialize for an inline region whose first row is ``start_row`` (0-based).

        Each row is addressed and cleared before its cells are emitted.
        """
        return self._serialize(start_row, clear_lines=True)

    def render_fullscreen(self) -> str:
        """Serialize the whole screen after a home + clear."""
        return f"{CSI}H{CSI}2J" + self._serialize(0, clear_lines=False)

    def _serialize(self, start_row: int, *, clear_lines: bool) -> str:
        parts: list[str] = []
        current_fg: TermColor | None = None
        current_bg: TermColor | None = None
        current_bold = False
        current_underline = False

        for y in range(self.height):
            parts.append(f"{CSI}{start_row + y + 1};1H")
            if clear_lines:
                parts.append(f"{CSI}2K")
            row_start = y * self.width
            for cell in self.cells[row_start : row_start + self.width]:
                # Dropping any active attribute resets all of them.
                if (
                    (current_bold and not cell.bold)
                    or (current_underline and not cell.underline)
                    or (current_fg is not None and cell.fg is None)
                    or (current_bg is not None and cell.bg is None)
                ):
                    parts.append(RESET)
                    current_fg = None
                    current_bg = None
                    current_bold = False
                    current_underline = False

                if cell.bold and not current_bold:
                    parts.append(BOLD)
                    current_bold = True
                if cell.underline and not current_underline:
                    parts.append(UNDERLINE)
                    current_underline = True
                if cell.fg is not None and cell.fg != current_fg:
                    parts.append(fg_sgr(cell.fg))
                    current_fg = cell.fg
                if cell.bg is not None and cell.bg != current_bg:
                    parts.append(bg_sgr(cell.bg))
                    current_bg = cell.bg
                parts.append(cell.char)

        parts.append(RESET)
        return "".join(parts)
