"""Unit tests for the filter and aggregate stage."""
import unittest
from usagetracker.exceptions import DescriptorNotFound
from usagetracker.models import ApplicationDescriptor, Category, RawUsageRecord
from usagetracker.services.categorizer import Categorizer, CategoryRule
from usagetracker.services.usage_service import UsageService, descriptor_lookup

MINUTE = 60_000


class TestBuildUsageEntries(unittest.TestCase):
    """Test filtering and conversion of usage records."""

    def setUp(self) -> None:
        self.service = UsageService()
        self.apps = [
            ApplicationDescriptor("com.instagram.android", "Instagram"),
            ApplicationDescriptor("com.spotify.music", "Spotify"),
            ApplicationDescriptor("com.android.settings", "Settings", is_system=True),
            ApplicationDescriptor("com.example.notes", "Notes"),
        ]
        self.lookup = descriptor_lookup(self.apps)

    def _record(self, package: str, duration_ms: int, last_used: int = 1_700_000_000_000) -> RawUsageRecord:
        return RawUsageRecord(package, duration_ms, last_used)

    def test_converts_user_app_record(self) -> None:
        entries = self.service.build_usage_entries(
            [self._record("com.instagram.android", 5 * MINUTE, 1_700_000_123_000)],
            self.lookup,
        )

        self.assertEqual(len(entries), 1)
        entry = entries[0]
        self.assertEqual(entry.package_id, "com.instagram.android")
        self.assertEqual(entry.display_name, "Instagram")
        self.assertEqual(entry.total_foreground_minutes, 5)
        self.assertEqual(entry.last_used_ms, 1_700_000_123_000)
        self.assertEqual(entry.category, Category.SOCIAL)

    def test_system_apps_excluded(self) -> None:
        entries = self.service.build_usage_entries(
            [self._record("com.android.settings", 30 * MINUTE)], self.lookup
        )
        self.assertEqual(entries, [])

    def test_one_minute_boundary_is_excluded(self) -> None:
        """Exactly 60000 ms is dropped, one millisecond more is kept."""
        entries = self.service.build_usage_entries([
            self._record("com.instagram.android", MINUTE),
            self._record("com.spotify.music", MINUTE + 1),
            self._record("com.example.notes", 59_999),
        ], self.lookup)

        self.assertEqual([e.package_id for e in entries], ["com.spotify.music"])
        self.assertEqual(entries[0].total_foreground_minutes, 1)

    def test_minutes_are_floored(self) -> None:
        entries = self.service.build_usage_entries([
            self._record("com.instagram.android", 90_000),
            self._record("com.spotify.music", 3 * MINUTE - 1),
        ], self.lookup)

        minutes = {e.package_id: e.total_foreground_minutes for e in entries}
        self.assertEqual(minutes, {"com.instagram.android": 1, "com.spotify.music": 2})

    def test_unknown_package_skipped(self) -> None:
        """Records without an installed descriptor are omitted, not fatal."""
        entries = self.service.build_usage_entries([
            self._record("com.removed.app", 10 * MINUTE),
            self._record("com.example.notes", 10 * MINUTE),
        ], self.lookup)

        self.assertEqual({e.package_id for e in entries}, {"com.example.notes"})

    def test_below_threshold_skips_lookup(self) -> None:
        looked_up: list[str] = []

        def lookup(package_id: str) -> ApplicationDescriptor:
            looked_up.append(package_id)
            return ApplicationDescriptor(package_id, package_id)

        self.service.build_usage_entries([self._record("com.example.notes", 1000)], lookup)
        self.assertEqual(looked_up, [])

    def test_empty_input(self) -> None:
        self.assertEqual(self.service.build_usage_entries([], self.lookup), [])

    def test_custom_threshold_and_rules(self) -> None:
        service = UsageService(
            Categorizer((CategoryRule(Category.HEALTH, ("notes",)),)),
            min_foreground_ms=0,
        )
        entries = service.build_usage_entries([self._record("com.example.notes", 1)], self.lookup)

        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].total_foreground_minutes, 0)
        self.assertEqual(entries[0].category, Category.HEALTH)


class TestBuildInstalledEntries(unittest.TestCase):
    """Test the installed-applications path."""

    def test_every_user_app_with_zero_usage(self) -> None:
        service = UsageService()
        entries = service.build_installed_entries([
            ApplicationDescriptor("com.whatsapp", "WhatsApp"),
            ApplicationDescriptor("com.android.systemui", "System UI", is_system=True),
            ApplicationDescriptor("com.netflix.mediaclient", "Netflix"),
        ])

        self.assertEqual({e.package_id for e in entries}, {"com.whatsapp", "com.netflix.mediaclient"})
        for entry in entries:
            self.assertEqual(entry.total_foreground_minutes, 0)
            self.assertEqual(entry.last_used_ms, 0)
        categories = {e.package_id: e.category for e in entries}
        self.assertEqual(categories["com.whatsapp"], Category.SOCIAL)
        self.assertEqual(categories["com.netflix.mediaclient"], Category.ENTERTAINMENT)

    def test_no_apps(self) -> None:
        self.assertEqual(UsageService().build_installed_entries([]), [])


class TestDescriptorLookup(unittest.TestCase):

    def test_raises_for_unknown_package(self) -> None:
        lookup = descriptor_lookup([ApplicationDescriptor("com.whatsapp", "WhatsApp")])

        self.assertEqual(lookup("com.whatsapp").display_name, "WhatsApp")
        with self.assertRaises(DescriptorNotFound) as ctx:
            lookup("com.missing")
        self.assertEqual(ctx.exception.package_id, "com.missing")


if __name__ == "__main__":
    unittest.main()
