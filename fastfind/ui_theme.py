"""UI theme definitions and selection helpers.

Themes map semantic roles (prompt, cursor row, selection marker, help line)
to terminal colors. ``None`` means the terminal default.
"""

from __future__ import annotations

from dataclasses import dataclass

from .render.colors import AnsiValue, Color, TermColor


@dataclass(frozen=True)
class UITheme:
    """Semantic palette used by the frame painter."""

    name: str
    prompt: TermColor | None
    counter: TermColor | None
    cursor_fg: TermColor | None
    cursor_bg: TermColor | None
    cursor_match_fg: TermColor | None
    selected_marker: TermColor | None
    help_dim: TermColor | None
    warning: TermColor | None


DEFAULT_THEME = UITheme(
    name="default",
    prompt=Color.CYAN,
    counter=Color.DARK_GREY,
    cursor_fg=Color.YELLOW,
    cursor_bg=Color.DARK_GREY,
    cursor_match_fg=Color.WHITE,
    selected_marker=Color.GREEN,
    help_dim=Color.DARK_GREY,
    warning=Color.YELLOW,
)

OCEAN_THEME = UITheme(
    name="ocean",
    prompt=AnsiValue(45),
    counter=AnsiValue(110),
    cursor_fg=AnsiValue(153),
    cursor_bg=AnsiValue(24),
    cursor_match_fg=Color.WHITE,
    selected_marker=AnsiValue(84),
    help_dim=AnsiValue(110),
    warning=AnsiValue(215),
)

PLAIN_THEME = UITheme(
    name="plain",
    prompt=None,
    counter=None,
    cursor_fg=None,
    cursor_bg=None,
    cursor_match_fg=None,
    selected_marker=None,
    help_dim=None,
    warning=None,
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
