"""Terminal color vocabulary and its SGR encodings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

CSI = "\033["
RESET = f"{CSI}0m"
BOLD = f"{CSI}1m"
UNDERLINE = f"{CSI}4m"


class Color(Enum):
    """Named 16-color palette entries.

    Bright and dark variants share the base 30-37 codes; only ``DARK_GREY``
    uses the bright range.
    """

    BLACK = "black"
    DARK_GREY = "dark_grey"
    RED = "red"
    DARK_RED = "dark_red"
    GREEN = "green"
    DARK_GREEN = "dark_green"
    YELLOW = "yellow"
    DARK_YELLOW = "dark_yellow"
    BLUE = "blue"
    DARK_BLUE = "dark_blue"
    MAGENTA = "magenta"
    DARK_MAGENTA = "dark_magenta"
    CYAN = "cyan"
    DARK_CYAN = "dark_cyan"
    WHITE = "white"
    GREY = "grey"
    RESET = "reset"


@dataclass(frozen=True)
class Rgb:
    r: int
    g: int
    b: int


@dataclass(frozen=True)
class AnsiValue:
    """Index into the 256-color palette."""

    value: int


TermColor = Union[Color, Rgb, AnsiValue]

_FOREGROUND_CODES: dict[Color, int] = {
    Color.BLACK: 30,
    Color.DARK_GREY: 90,
    Color.RED: 31,
    Color.DARK_RED: 31,
    Color.GREEN: 32,
    Color.DARK_GREEN: 32,
    Color.YELLOW: 33,
    Color.DARK_YELLOW: 33,
    Color.BLUE: 34,
    Color.DARK_BLUE: 34,
    Color.MAGENTA: 35,
    Color.DARK_MAGENTA: 35,
    Color.CYAN: 36,
    Color.DARK_CYAN: 36,
    Color.WHITE: 37,
    Color.GREY: 37,
    Color.RESET: 39,
}


def _sgr(color: TermColor, background: bool) -> str:
    if isinstance(color, Rgb):
        lead = 48 if background else 38
        return f"{CSI}{lead};2;{color.r};{color.g};{color.b}m"
    if isinstance(color, AnsiValue):
        lead = 48 if background else 38
        return f"{CSI}{lead};5;{color.value}m"
    code = _FOREGROUND_CODES[color]
    if background:
        code += 10
    return f"{CSI}{code}m"


def fg_sgr(color: TermColor) -> str:
    """Escape sequence selecting ``color`` as the foreground."""
    return _sgr(color, background=False)


def bg_sgr(color: TermColor) -> str:
    """Escape sequence selecting ``color`` as the background."""
    return _sgr(color, background=True)


__all__ = [
    "AnsiValue",
    "BOLD",
    "Color",
    "RESET",
    "Rgb",
    "TermColor",
    "UNDERLINE",
    "bg_sgr",
    "fg_sgr",
]
