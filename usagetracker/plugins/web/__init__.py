"""
Web API Plugin.
"""
from typing import Any

PLUGIN_INFO: dict[str, Any] = {
    "name": "web",
    "display_name": "Web API",
    "version": "1.0.0",
    "description": "JSON API over HTTP with plugin route extension support",
}
