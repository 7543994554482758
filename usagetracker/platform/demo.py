"""Sample-data fallback used when no device is reachable."""
import time
from typing import List, Optional, Sequence
from .base import PlatformBase
from ..config import MS_PER_MINUTE
from ..models import ApplicationDescriptor, RawUsageRecord, UsageWindow


SAMPLE_APPS: Sequence[ApplicationDescriptor] = (
    ApplicationDescriptor("com.instagram.android", "Instagram"),
    ApplicationDescriptor("com.zhiliaoapp.musically.tiktok", "TikTok"),
    ApplicationDescriptor("com.whatsapp", "WhatsApp"),
    ApplicationDescriptor("com.google.android.youtube", "YouTube"),
    ApplicationDescriptor("com.google.android.gm", "Gmail"),
    ApplicationDescriptor("com.android.chrome", "Chrome"),
    ApplicationDescriptor("com.spotify.music", "Spotify"),
    ApplicationDescriptor("com.twitter.android", "Twitter"),
    ApplicationDescriptor("com.android.settings", "Settings", is_system=True),
)

# (package, foreground minutes, minutes since last use)
SAMPLE_USAGE: Sequence[tuple] = (
    ("com.instagram.android", 75, 12),
    ("com.zhiliaoapp.musically.tiktok", 110, 35),
    ("com.whatsapp", 48, 3),
    ("com.google.android.youtube", 130, 90),
    ("com.google.android.gm", 22, 55),
    ("com.android.chrome", 64, 20),
    ("com.spotify.music", 58, 140),
    ("com.twitter.android", 36, 240),
    ("com.android.settings", 4, 300),
)


class DemoPlatform(PlatformBase):
    """
    In-process platform serving fixed sample data.

    Permission is always granted unless configured otherwise. Usage is
    anchored to the window end so results look recent for any window.
    """

    def __init__(
        self,
        applications: Optional[Sequence[ApplicationDescriptor]] = None,
        usage: Optional[Sequence[RawUsageRecord]] = None,
        granted: bool = True
    ) -> None:
        self.applications = list(SAMPLE_APPS if applications is None else applications)
        self.usage = None if usage is None else list(usage)
        self.granted = granted

    @property
    def name(self) -> str:
        return "Demo"

    def has_usage_permission(self) -> bool:
        return self.granted

    def request_usage_permission(self) -> bool:
        return self.granted

    def list_installed_applications(self) -> List[ApplicationDescriptor]:
        return list(self.applications)

    def query_usage(self, window: UsageWindow) -> List[RawUsageRecord]:
        if self.usage is not None:
            return list(self.usage)

        end = min(window.end_time, int(time.time() * 1000))
        records: List[RawUsageRecord] = []
        for package, minutes, ago in SAMPLE_USAGE:
            duration = min(minutes * MS_PER_MINUTE, window.duration_ms)
            last_used = max(window.start_time, end - ago * MS_PER_MINUTE)
            records.append(RawUsageRecord(package, duration, last_used))
        return records
