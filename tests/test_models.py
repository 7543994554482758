"""Unit tests for data models and response shapes."""
import unittest
from usagetracker.models import (
    AppUsageEntry,
    Category,
    InstalledAppsResult,
    PermissionResult,
    UsageStatsResult,
    UsageWindow,
)

DAY_MS = 24 * 60 * 60 * 1000
NOW = 1_700_000_000_000


class TestUsageWindow(unittest.TestCase):
    """Test window defaults and invariant."""

    def test_defaults_to_lookback_ending_now(self) -> None:
        window = UsageWindow.resolve(None, None, NOW, DAY_MS)
        self.assertEqual(window.start_time, NOW - DAY_MS)
        self.assertEqual(window.end_time, NOW)
        self.assertEqual(window.duration_ms, DAY_MS)

    def test_explicit_bounds_kept(self) -> None:
        window = UsageWindow.resolve(1000, 2000, NOW, DAY_MS)
        self.assertEqual((window.start_time, window.end_time), (1000, 2000))

    def test_partial_bounds(self) -> None:
        self.assertEqual(UsageWindow.resolve(5, None, NOW, DAY_MS).end_time, NOW)
        self.assertEqual(UsageWindow.resolve(None, NOW - 10, NOW, DAY_MS).start_time, NOW - DAY_MS)

    def test_empty_window_allowed(self) -> None:
        self.assertEqual(UsageWindow(10, 10).duration_ms, 0)

    def test_start_after_end_rejected(self) -> None:
        with self.assertRaises(ValueError):
            UsageWindow(2000, 1000)


class TestWireShape(unittest.TestCase):
    """Test serialization to the calling layer's field names."""

    def setUp(self) -> None:
        self.entry = AppUsageEntry(
            package_id="com.whatsapp",
            display_name="WhatsApp",
            total_foreground_minutes=12,
            last_used_ms=NOW,
            category=Category.SOCIAL,
        )

    def test_entry_fields(self) -> None:
        self.assertEqual(self.entry.to_dict(), {
            "packageName": "com.whatsapp",
            "appName": "WhatsApp",
            "totalTimeInForeground": 12,
            "lastTimeUsed": NOW,
            "category": "Social",
        })

    def test_usage_success_has_no_error_key(self) -> None:
        data = UsageStatsResult.ok([self.entry]).to_dict()
        self.assertEqual(data["success"], True)
        self.assertEqual(len(data["apps"]), 1)
        self.assertNotIn("error", data)

    def test_usage_failure(self) -> None:
        data = UsageStatsResult.failure("boom").to_dict()
        self.assertEqual(data, {"success": False, "apps": [], "error": "boom"})

    def test_permission_and_installed(self) -> None:
        self.assertEqual(PermissionResult(granted=True).to_dict(), {"granted": True})
        self.assertEqual(InstalledAppsResult().to_dict(), {"apps": []})

    def test_entry_is_immutable(self) -> None:
        with self.assertRaises(AttributeError):
            self.entry.total_foreground_minutes = 99  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
