"""Display mode and height policy for the finder view."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class DisplayConfig:
    """How much of the terminal the finder occupies and what chrome it draws.

    Non-fullscreen views render inline below the cursor, sized by a fixed
    ``height`` or by ``height_percentage`` of the terminal.
    """

    fullscreen: bool = True
    height: int | None = None
    height_percentage: float | None = None
    show_help_text: bool = True
    prompt: str = "> "

    @classmethod
    def full_screen(cls) -> DisplayConfig:
        return cls(fullscreen=True)

    @classmethod
    def with_height(cls, height: int) -> DisplayConfig:
        return cls(fullscreen=False, height=height)

    @classmethod
    def with_height_percentage(cls, percentage: float) -> DisplayConfig:
        return cls(fullscreen=False, height_percentage=percentage)

    def with_options(self, **changes) -> DisplayConfig:
        return replace(self, **changes)

    def calculate_height(self, terminal_height: int) -> int:
        """Rows to use on a terminal ``terminal_height`` rows tall."""
        terminal_height = max(0, terminal_height)
        if self.fullscreen:
            return terminal_height
        if self.height is not None:
            return min(max(0, self.height), terminal_height)
        if self.height_percentage is not None:
            calculated = int(terminal_height * self.height_percentage / 100.0)
            return min(max(1, calculated), terminal_height)
        return terminal_height
