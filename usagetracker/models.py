"""
Data models for usage queries and plugin responses.

All timestamps are epoch milliseconds.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Category(Enum):
    """Coarse classification label for an application."""
    SOCIAL = "Social"
    ENTERTAINMENT = "Entertainment"
    PRODUCTIVITY = "Productivity"
    GAMES = "Games"
    FINANCE = "Finance"
    HEALTH = "Health"
    OTHER = "Other"


@dataclass(frozen=True)
class UsageWindow:
    """Time interval over which foreground usage is aggregated."""
    start_time: int
    end_time: int

    def __post_init__(self) -> None:
        if self.start_time > self.end_time:
            raise ValueError(
                f"Window start ({self.start_time}) is after end ({self.end_time})"
            )

    @classmethod
    def resolve(
        cls,
        start_time: Optional[int],
        end_time: Optional[int],
        now: int,
        lookback_ms: int
    ) -> "UsageWindow":
        """
        Build a window from optional caller bounds.

        A missing start defaults to ``now - lookback_ms`` and a missing
        end defaults to ``now``.
        """
        if start_time is None:
            start_time = now - lookback_ms
        if end_time is None:
            end_time = now
        return cls(start_time=start_time, end_time=end_time)

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class RawUsageRecord:
    """Per-application foreground time reported by a platform."""
    package_id: str
    total_foreground_ms: int
    last_used_ms: int


@dataclass(frozen=True)
class ApplicationDescriptor:
    """Installed application metadata reported by a platform."""
    package_id: str
    display_name: str
    is_system: bool = False


@dataclass(frozen=True)
class AppUsageEntry:
    """A single application row returned to the calling layer."""
    package_id: str
    display_name: str
    total_foreground_minutes: int
    last_used_ms: int
    category: Category

    def to_dict(self) -> Dict[str, Any]:
        return {
            "packageName": self.package_id,
            "appName": self.display_name,
            "totalTimeInForeground": self.total_foreground_minutes,
            "lastTimeUsed": self.last_used_ms,
            "category": self.category.value,
        }


# --- Responses ---

@dataclass(frozen=True)
class UsageStatsResult:
    """Response of the usage-statistics query."""
    success: bool
    apps: List[AppUsageEntry] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, apps: List[AppUsageEntry]) -> "UsageStatsResult":
        return cls(success=True, apps=list(apps))

    @classmethod
    def failure(cls, error: str) -> "UsageStatsResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "apps": [app.to_dict() for app in self.apps],
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class PermissionResult:
    """Response of the permission check and permission request."""
    granted: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"granted": self.granted}


@dataclass(frozen=True)
class InstalledAppsResult:
    """Response of the installed-applications listing."""
    apps: List[AppUsageEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"apps": [app.to_dict() for app in self.apps]}
