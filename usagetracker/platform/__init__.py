"""Platform detection and factory."""
from typing import Optional
from .base import PlatformBase
from .android import AndroidPlatform
from .demo import DemoPlatform
from .. import config


_platform_instance: Optional[PlatformBase] = None


def detect_platform() -> PlatformBase:
    """
    Detect the usage data source and return a platform instance.

    Detection order:
    1. USAGETRACKER_PLATFORM environment override ("android" or "demo")
    2. adb installed with a device attached
    3. Fallback to demo data
    """
    global _platform_instance

    if _platform_instance is not None:
        return _platform_instance

    override = config.PLATFORM_OVERRIDE
    if override == "android":
        _platform_instance = AndroidPlatform()
    elif override == "demo":
        _platform_instance = DemoPlatform()
    else:
        if override:
            print(f"Unknown platform override '{override}', detecting")
        android = AndroidPlatform()
        if android._check_command(android.adb_path) and android.is_device_connected():
            _platform_instance = android
        else:
            _platform_instance = DemoPlatform()

    print(f"Detected platform: {_platform_instance.name}")
    return _platform_instance


def get_platform() -> PlatformBase:
    """Get current platform instance (cached)."""
    return detect_platform()


def reset_platform() -> None:
    """Forget the cached instance so the next call detects again."""
    global _platform_instance
    _platform_instance = None


__all__ = ["PlatformBase", "AndroidPlatform", "DemoPlatform",
           "get_platform", "detect_platform", "reset_platform"]
