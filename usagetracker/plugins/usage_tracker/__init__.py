"""
App usage statistics plugin.
"""

from typing import Any


PLUGIN_INFO: dict[str, Any] = {
    "name": "usage_tracker",
    "display_name": "Usage Tracker",
    "version": "1.0.0",
    "description": "Per-app foreground time and installed applications from the device",
}
