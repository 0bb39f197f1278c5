"""Rendering: color vocabulary, the cell buffer and the finder frame layout."""

from .buffer import DEFAULT_CELL, Cell, ScreenBuffer
from .colors import AnsiValue, Color, Rgb, bg_sgr, fg_sgr

__all__ = [
    "AnsiValue",
    "Cell",
    "Color",
    "DEFAULT_CELL",
    "Rgb",
    "ScreenBuffer",
    "bg_sgr",
    "fg_sgr",
]
