from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastfind.runtime import config
from fastfind.runtime.config import FinderSettings


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_or_malformed_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("fastfind.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_finder_settings(), FinderSettings())

                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                self.assertTrue(config.load_show_help_text())
                self.assertIsNone(config.load_theme_name())

    def test_finder_settings_are_read_from_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("fastfind.runtime.config.CONFIG_PATH", config_path):
                config.save_config(
                    {"parallel_threshold": 50, "cache_queries": False, "rank_results": True, "max_workers": 3}
                )
                self.assertEqual(
                    config.load_finder_settings(),
                    FinderSettings(parallel_threshold=50, cache_queries=False, rank_results=True, max_workers=3),
                )

    def test_invalid_values_are_dropped_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "parallel_threshold": True,
                        "cache_queries": "yes",
                        "rank_results": True,
                        "max_workers": -2,
                        "show_help_text": 0,
                        "theme": "  ocean  ",
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch("fastfind.runtime.config.CONFIG_PATH", config_path):
                settings = config.load_finder_settings()
                self.assertEqual(settings.parallel_threshold, FinderSettings().parallel_threshold)
                self.assertTrue(settings.cache_queries)
                self.assertTrue(settings.rank_results)
                self.assertIsNone(settings.max_workers)
                self.assertTrue(config.load_show_help_text())
                self.assertEqual(config.load_theme_name(), "ocean")

    def test_theme_and_help_preferences_share_one_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("fastfind.runtime.config.CONFIG_PATH", config_path):
                config.save_theme_name("ocean")
                config.save_theme_name("   ")
                config.save_config({**config.load_config(), "show_help_text": False})
                self.assertEqual(config.load_theme_name(), "ocean")
                self.assertFalse(config.load_show_help_text())

    def test_save_errors_are_not_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("fastfind.runtime.config.CONFIG_PATH", blocker / "config.json"):
                config.save_config({"theme": "ocean"})
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
