"""Unit tests for the user settings loader."""
import json
import os
import tempfile
import unittest
from unittest.mock import patch
from usagetracker import config
from usagetracker.config import Config


class TestConfig(unittest.TestCase):
    """Test defaults, overrides and reload."""

    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "settings.json")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write(self, content: str) -> None:
        with open(self.path, "w") as f:
            f.write(content)

    def test_defaults_without_file(self) -> None:
        cfg = Config(self.path)
        self.assertEqual(cfg.lookback_hours, 24)
        self.assertEqual(cfg.lookback_ms, 24 * 60 * 60 * 1000)
        self.assertEqual(cfg.min_foreground_ms, 60_000)
        self.assertIsNone(cfg.category_rules)

    def test_values_from_file(self) -> None:
        self._write(json.dumps({"lookback_hours": 6, "min_foreground_ms": 0, "adb_timeout_sec": 5}))
        cfg = Config(self.path)
        self.assertEqual(cfg.lookback_ms, 6 * 60 * 60 * 1000)
        self.assertEqual(cfg.min_foreground_ms, 0)
        self.assertEqual(cfg.adb_timeout_sec, 5)

    def test_broken_file_falls_back(self) -> None:
        self._write("{not json")
        self.assertEqual(Config(self.path).lookback_hours, 24)
        self._write("[1, 2]")
        self.assertEqual(Config(self.path).lookback_hours, 24)

    def test_invalid_values_fall_back_individually(self) -> None:
        self._write(json.dumps({
            "lookback_hours": "x",
            "min_foreground_ms": "60000",
            "adb_timeout_sec": True,
            "category_rules": {"category": "Games"},
        }))
        cfg = Config(self.path)
        self.assertEqual(cfg.lookback_hours, 24)
        self.assertEqual(cfg.lookback_ms, 24 * 60 * 60 * 1000)
        self.assertEqual(cfg.min_foreground_ms, 60_000)
        self.assertEqual(cfg.adb_timeout_sec, 60)
        self.assertIsNone(cfg.category_rules)

        self._write(json.dumps({"lookback_hours": -1, "min_foreground_ms": 1.5, "adb_timeout_sec": 10}))
        cfg.reload()
        self.assertEqual(cfg.lookback_hours, 24)
        self.assertEqual(cfg.min_foreground_ms, 60_000)
        self.assertEqual(cfg.adb_timeout_sec, 10)

    def test_reload_picks_up_changes(self) -> None:
        cfg = Config(self.path)
        self._write(json.dumps({"lookback_hours": 1}))
        cfg.reload()
        self.assertEqual(cfg.lookback_hours, 1)


class TestDebugLog(unittest.TestCase):

    def test_writes_only_in_debug_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "debug.log")
            with patch.object(config, "DEBUG_LOG_PATH", path):
                with patch.object(config, "DEBUG_MODE", False):
                    config.debug_log("hidden")
                self.assertFalse(os.path.exists(path))

                with patch.object(config, "DEBUG_MODE", True):
                    config.debug_log("shown")
                with open(path) as f:
                    self.assertIn("shown", f.read())


if __name__ == "__main__":
    unittest.main()
