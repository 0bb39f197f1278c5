from __future__ import annotations

import unittest

from fastfind.ui_theme import (
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class ThemeSelectionTests(unittest.TestCase):
    def test_available_names_exclude_plain(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_normalize_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_theme_name(None), "default")
        self.assertEqual(normalize_theme_name("  OCEAN "), "ocean")
        self.assertEqual(normalize_theme_name("neon"), "default")

    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()
