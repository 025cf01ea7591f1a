"""Persisted preferences survive restarts and tolerate bad files."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from marcos import config


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertFalse(config.load_show_hidden())
        self.assertIsNone(config.load_theme_name())
        self.assertIsNone(config.load_syntax_style())

    def test_ensure_config_dir_creates_parent(self) -> None:
        directory = config.ensure_config_dir()
        self.assertEqual(directory, self.config_path.parent)
        self.assertTrue(directory.is_dir())

    def test_preferences_round_trip(self) -> None:
        config.save_show_hidden(True)
        config.save_theme_name("  ocean ")
        config.save_syntax_style("native")

        self.assertTrue(config.load_show_hidden())
        self.assertEqual(config.load_theme_name(), "ocean")
        self.assertEqual(config.load_syntax_style(), "native")
        stored = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(stored, {"show_hidden": True, "theme": "ocean", "syntax_style": "native"})

    def test_blank_names_are_not_saved(self) -> None:
        config.save_theme_name("dark")
        config.save_theme_name("   ")
        self.assertEqual(config.load_theme_name(), "dark")

    def test_malformed_json_is_ignored(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

    def test_non_object_and_wrong_types_fall_back(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(config.load_config(), {})

        self.config_path.write_text('{"show_hidden": "yes", "theme": 3}', encoding="utf-8")
        self.assertFalse(config.load_show_hidden())
        self.assertIsNone(config.load_theme_name())


if __name__ == "__main__":
    unittest.main()
