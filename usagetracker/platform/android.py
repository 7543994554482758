"""Android implementation backed by adb."""
import re
import datetime
from typing import Dict, List, Optional, Set, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from .base import PlatformBase
from ..config import ADB_PATH, APP_PACKAGE, DEVICE_SERIAL, settings, debug_log
from ..exceptions import PermissionDenied, PlatformUnavailable
from ..models import ApplicationDescriptor, RawUsageRecord, UsageWindow

EVENT_PATTERN = re.compile(
    r'time="(?P<time>[\d-]+ [\d:]+)"\s+type=(?P<type>\w+)\s+package=(?P<package>\S+)'
)
# MOVE_TO_FOREGROUND/MOVE_TO_BACKGROUND are the names used before Android Q
FOREGROUND_START = ("ACTIVITY_RESUMED", "MOVE_TO_FOREGROUND")
FOREGROUND_END = ("ACTIVITY_PAUSED", "ACTIVITY_STOPPED", "MOVE_TO_BACKGROUND")

# Package id segments that never make a useful display name
LABEL_SKIP_SEGMENTS = {"com", "org", "net", "io", "app", "apps", "android", "google", "mobile", "client"}

UsageEvent = Tuple[int, str, str]


def parse_usage_events(output: str, tz: Optional[datetime.tzinfo] = None) -> List[UsageEvent]:
    """
    Extract (timestamp_ms, event_type, package) tuples from dumpsys output.

    dumpsys prints wall-clock times in the device zone; tz is that zone,
    None meaning the host's local time. Event lines repeat across interval
    sections, so duplicates are dropped. The result is sorted by timestamp.
    """
    seen: Set[str] = set()
    events: List[UsageEvent] = []
    for line in output.splitlines():
        line = line.strip()
        match = EVENT_PATTERN.search(line)
        if not match or line in seen:
            continue
        seen.add(line)
        try:
            when = datetime.datetime.strptime(match.group("time"), "%Y-%m-%d %H:%M:%S")
        except ValueError:
            continue
        if tz is not None:
            when = when.replace(tzinfo=tz)
        events.append((int(when.timestamp() * 1000), match.group("type"), match.group("package")))
    events.sort(key=lambda e: e[0])
    return events


def aggregate_usage_events(events: List[UsageEvent], window: UsageWindow) -> List[RawUsageRecord]:
    """
    Sum foreground time per package within window.

    A session runs from a foreground event to the next background event
    of the same package and only its overlap with the
    window counts. Sessions still open count up to the window end.
    """
    totals: Dict[str, int] = {}
    last_used: Dict[str, int] = {}
    open_sessions: Dict[str, int] = {}

    def close(package: str, started: int, ended: int) -> None:
        overlap = min(ended, window.end_time) - max(started, window.start_time)
        if overlap > 0:
            totals[package] = totals.get(package, 0) + overlap
            last_used[package] = max(last_used.get(package, 0), min(ended, window.end_time))

    for timestamp, event_type, package in events:
        if event_type not in FOREGROUND_START and event_type not in FOREGROUND_END:
            continue

        if window.start_time <= timestamp <= window.end_time:
            totals.setdefault(package, 0)
            last_used[package] = max(last_used.get(package, 0), timestamp)

        if event_type in FOREGROUND_START:
            open_sessions.setdefault(package, timestamp)
        elif package in open_sessions:
            close(package, open_sessions.pop(package), timestamp)

    for package, started in open_sessions.items():
        close(package, started, window.end_time)

    return [
        RawUsageRecord(package_id=package, total_foreground_ms=total, last_used_ms=last_used[package])
        for package, total in totals.items()
    ]


def parse_package_list(output: str) -> List[str]:
    """Parse `pm list packages` output into package ids."""
    return [
        line.strip()[len("package:"):]
        for line in output.splitlines()
        if line.strip().startswith("package:")
    ]


def label_from_package(package_id: str) -> str:
    """Derive a readable name, e.g. com.instagram.android -> Instagram."""
    for segment in package_id.split("."):
        if segment and segment.lower() not in LABEL_SKIP_SEGMENTS:
            return segment.capitalize()
    return package_id


class AndroidPlatform(PlatformBase):
    """Device reached through adb."""

    APPOPS_COMMAND = ["appops", "get"]
    USAGE_OP = "GET_USAGE_STATS"
    SETTINGS_COMMAND = ["am", "start", "-a", "android.settings.USAGE_ACCESS_SETTINGS"]
    PACKAGES_COMMAND = ["pm", "list", "packages"]
    SYSTEM_PACKAGES_COMMAND = ["pm", "list", "packages", "-s"]
    USAGE_COMMAND = ["dumpsys", "usagestats"]
    TIMEZONE_COMMAND = ["getprop", "persist.sys.timezone"]

    def __init__(self, adb_path: str = ADB_PATH, serial: Optional[str] = DEVICE_SERIAL,
                 app_package: str = APP_PACKAGE) -> None:
        self.adb_path = adb_path
        self.serial = serial
        self.app_package = app_package
        self._timezone: Optional[datetime.tzinfo] = None
        self._timezone_read = False

    @property
    def name(self) -> str:
        return f"Android ({self.serial})" if self.serial else "Android"

    def _shell(self, args: List[str]) -> str:
        cmd = [self.adb_path]
        if self.serial:
            cmd += ["-s", self.serial]
        return self._run_command(cmd + ["shell"] + args, timeout=settings.adb_timeout_sec)

    def is_device_connected(self) -> bool:
        """True if adb lists at least one device in the 'device' state."""
        try:
            output = self._run_command([self.adb_path, "devices"], timeout=10)
        except PlatformUnavailable:
            return False
        for line in output.splitlines()[1:]:
            parts = line.split()
            if len(parts) >= 2 and parts[1] == "device":
                if self.serial is None or parts[0] == self.serial:
                    return True
        return False

    def device_timezone(self) -> Optional[datetime.tzinfo]:
        """
        Time zone configured on the device, read once per platform.

        None (host local time) when the property is empty, unknown to the
        host's zone database, or cannot be read.
        """
        if self._timezone_read:
            return self._timezone
        try:
            key = self._shell(self.TIMEZONE_COMMAND).strip()
        except PlatformUnavailable as e:
            debug_log(f"getprop timezone failed: {e}")
            return None
        self._timezone_read = True
        if key:
            try:
                self._timezone = ZoneInfo(key)
            except (ZoneInfoNotFoundError, ValueError):
                print(f"Unknown device time zone {key!r}, using host local time")
        return self._timezone

    def has_usage_permission(self) -> bool:
        """Check the app-op mode for the configured package."""
        try:
            output = self._shell(self.APPOPS_COMMAND + [self.app_package, self.USAGE_OP])
        except PlatformUnavailable as e:
            debug_log(f"appops check failed: {e}")
            return False
        for line in output.splitlines():
            if line.strip().startswith(f"{self.USAGE_OP}:"):
                mode = line.split(":", 1)[1].split(";")[0].strip()
                return mode == "allow"
        return False

    def request_usage_permission(self) -> bool:
        """Open the usage-access settings screen on the device."""
        if self.has_usage_permission():
            return True
        self._shell(self.SETTINGS_COMMAND)
        return False

    def list_installed_applications(self) -> List[ApplicationDescriptor]:
        packages = parse_package_list(self._shell(self.PACKAGES_COMMAND))
        system = set(parse_package_list(self._shell(self.SYSTEM_PACKAGES_COMMAND)))
        return [
            ApplicationDescriptor(
                package_id=package,
                display_name=label_from_package(package),
                is_system=package in system,
            )
            for package in packages
        ]

    def query_usage(self, window: UsageWindow) -> List[RawUsageRecord]:
        if not self.has_usage_permission():
            raise PermissionDenied("Usage stats permission not granted")
        events = parse_usage_events(self._shell(self.USAGE_COMMAND), self.device_timezone())
        debug_log(f"dumpsys usagestats: {len(events)} events")
        return aggregate_usage_events(events, window)
