"""
usagetracker/plugins/usage_tracker/plugin.py

Bridge between the calling layer and the device usage platform.
"""
import time
from typing import Any, Callable, Optional
from ..base import PluginBase
from . import PLUGIN_INFO
from ...config import Config, settings, debug_log
from ...exceptions import PermissionDenied
from ...models import InstalledAppsResult, PermissionResult, UsageStatsResult, UsageWindow
from ...platform import PlatformBase, get_platform
from ...services.categorizer import Categorizer, load_rules
from ...services.usage_service import UsageService, descriptor_lookup

PERMISSION_NOT_GRANTED = "Usage stats permission not granted"


def now_ms() -> int:
    return int(time.time() * 1000)


class UsageTrackerPlugin(PluginBase):
    """
    Exposes usage statistics, permission handling and installed apps.

    None of the public operations raise: failures are reported inside
    the returned result so callers only ever inspect payload fields.
    """

    def __init__(
        self,
        platform: Optional[PlatformBase] = None,
        config: Config = settings,
        clock: Callable[[], int] = now_ms
    ) -> None:
        self._platform = platform
        self.config = config
        self.clock = clock

    @property
    def platform(self) -> PlatformBase:
        if self._platform is None:
            self._platform = get_platform()
        return self._platform

    @property
    def service(self) -> UsageService:
        """Filter stage built from the current settings."""
        return UsageService(
            Categorizer(load_rules(self.config.category_rules)),
            min_foreground_ms=self.config.min_foreground_ms,
        )

    def get_info(self) -> dict[str, Any]:
        """Return plugin metadata."""
        return PLUGIN_INFO

    def start(self) -> None:
        """Resolve the platform up front so detection is logged at startup."""
        platform = self.platform
        if not platform.has_usage_permission():
            print(f"Warning: usage access not granted on {platform.name}")

    def stop(self) -> None:
        pass

    # Exposed operations

    def get_usage_stats(self, start_time: Optional[int] = None,
                        end_time: Optional[int] = None) -> UsageStatsResult:
        """Usage entries for user apps in [start_time, end_time] (epoch ms)."""
        try:
            window = UsageWindow.resolve(start_time, end_time, self.clock(), self.config.lookback_ms)

            if not self.platform.has_usage_permission():
                return UsageStatsResult.failure(PERMISSION_NOT_GRANTED)

            records = self.platform.query_usage(window)
            lookup = descriptor_lookup(self.platform.list_installed_applications())
            apps = self.service.build_usage_entries(records, lookup)
            debug_log(f"get_usage_stats {window.start_time}-{window.end_time}: "
                      f"{len(records)} records, {len(apps)} apps")
            return UsageStatsResult.ok(apps)

        except PermissionDenied as e:
            return UsageStatsResult.failure(str(e) or PERMISSION_NOT_GRANTED)
        except Exception as e:
            print(f"Error in get_usage_stats: {e}")
            debug_log(f"get_usage_stats failed: {e!r}")
            return UsageStatsResult.failure(str(e) or type(e).__name__)

    def request_usage_stats_permission(self) -> PermissionResult:
        """Ask for usage access; False while the user still has to act."""
        if self.has_usage_stats_permission().granted:
            return PermissionResult(granted=True)
        try:
            return PermissionResult(granted=bool(self.platform.request_usage_permission()))
        except Exception as e:
            print(f"Error in request_usage_stats_permission: {e}")
            debug_log(f"request_usage_stats_permission failed: {e!r}")
            return PermissionResult(granted=False)

    def has_usage_stats_permission(self) -> PermissionResult:
        try:
            return PermissionResult(granted=bool(self.platform.has_usage_permission()))
        except Exception as e:
            debug_log(f"has_usage_stats_permission failed: {e!r}")
            return PermissionResult(granted=False)

    def get_installed_apps(self) -> InstalledAppsResult:
        """User apps with zero usage; empty on any failure."""
        try:
            descriptors = self.platform.list_installed_applications()
            return InstalledAppsResult(apps=self.service.build_installed_entries(descriptors))
        except Exception as e:
            print(f"Error in get_installed_apps: {e}")
            debug_log(f"get_installed_apps failed: {e!r}")
            return InstalledAppsResult()

    # Web integration

    def get_web_routes(self) -> list[tuple[str, Any, list[str]]]:
        """Return Flask routes for the web interface."""
        from .routes import UsageTrackerRoutes
        routes = UsageTrackerRoutes(self)
        return [
            ("/api/usage/stats", routes.api_usage_stats, ["GET", "POST"]),
            ("/api/usage/permission", routes.api_permission, ["GET", "POST"]),
            ("/api/usage/installed_apps", routes.api_installed_apps, ["GET"]),
        ]
