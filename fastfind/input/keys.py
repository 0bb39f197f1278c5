"""Normalized key event model shared by the decoder and the key handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

CTRL = "CTRL"
ALT = "ALT"
SHIFT = "SHIFT"

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
HOME = "HOME"
END = "END"
DELETE = "DELETE"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
ENTER = "ENTER"
ESC = "ESC"
TAB = "TAB"
BACKTAB = "BACKTAB"
BACKSPACE = "BACKSPACE"


@dataclass(frozen=True)
class KeyEvent:
    """One key press.

    ``code`` is a single character for printable keys and ``ctrl`` letters,
    or one of the named key constants above.
    """

    code: str
    modifiers: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def char(cls, ch: str, *modifiers: str) -> KeyEvent:
        return cls(ch, frozenset(modifiers))

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def ctrl(self) -> bool:
        return CTRL in self.modifiers

    @property
    def alt(self) -> bool:
        return ALT in self.modifiers
