"""Tests for explorer settings persistence and sanitization."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from projexplorer import config
from projexplorer.builders import DEFAULT_EXCLUDE


class ExplorerConfigTests(unittest.TestCase):
    def test_missing_config_file_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("projexplorer.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                loaded = config.load_explorer_config()

        self.assertEqual(loaded, config.ExplorerConfig())
        self.assertEqual(loaded.builder, "incremental")
        self.assertEqual(loaded.exclude, DEFAULT_EXCLUDE)

    def test_round_trip_through_json_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            wanted = config.ExplorerConfig(
                builder="external",
                cache_enabled=False,
                cache_dir=Path(tmp) / "trees",
                side="right",
                width=55,
                inline_folders=False,
                exclude=None,
                confirm_delete=False,
                idle_delay=0.25,
            )
            with mock.patch("projexplorer.config.CONFIG_PATH", config_path):
                config.save_explorer_config(wanted)
                loaded = config.load_explorer_config()

            self.assertEqual(loaded, wanted)
            self.assertIsNone(json.loads(config_path.read_text(encoding="utf-8"))["exclude"])

    def test_invalid_values_fall_back_key_by_key(self) -> None:
        loaded = config.config_from_mapping(
            {
                "builder": "parallel",
                "cache_enabled": "yes",
                "side": "top",
                "width": True,
                "idle_delay": -1,
                "listing_command": "   ",
                "inline_folders": False,
                "exclude": 42,
            }
        )
        defaults = config.ExplorerConfig()

        self.assertEqual(loaded.builder, defaults.builder)
        self.assertTrue(loaded.cache_enabled)
        self.assertEqual(loaded.side, "left")
        self.assertEqual(loaded.width, config.DEFAULT_WIDTH)
        self.assertEqual(loaded.idle_delay, defaults.idle_delay)
        self.assertEqual(loaded.listing_command, defaults.listing_command)
        self.assertFalse(loaded.inline_folders)
        self.assertEqual(loaded.exclude, DEFAULT_EXCLUDE)

    def test_empty_exclude_disables_exclusion(self) -> None:
        self.assertIsNone(config.config_from_mapping({"exclude": ""}).exclude)

    def test_malformed_json_and_non_object_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("projexplorer.config.CONFIG_PATH", config_path):
                config_path.write_text("{broken", encoding="utf-8")
                self.assertEqual(config.load_config(), {})
                config_path.write_text("[1, 2]", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

    def test_save_keeps_unrelated_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"theme": "dark"}', encoding="utf-8")
            with mock.patch("projexplorer.config.CONFIG_PATH", config_path):
                config.save_explorer_config(config.ExplorerConfig())
                saved = config.load_config()

            self.assertEqual(saved["theme"], "dark")
            self.assertEqual(saved["builder"], "incremental")

    def test_with_overrides_skips_none(self) -> None:
        base = config.ExplorerConfig()
        updated = base.with_overrides(builder="synchronous", exclude=None, width=None)

        self.assertEqual(updated.builder, "synchronous")
        self.assertEqual(updated.exclude, base.exclude)
        self.assertEqual(updated.width, base.width)


if __name__ == "__main__":
    unittest.main()
