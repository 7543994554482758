"""
Core API routes.
"""
from flask import Flask, jsonify
from typing import Any, Optional


def register_routes(app: Flask, manager: Optional[Any] = None) -> None:
    """Register core API routes with Flask app."""

    @app.route("/api/plugins")
    def api_plugins() -> Any: # pyright: ignore[reportUnusedFunction]
        """Metadata of loaded plugins."""
        if manager is None:
            return jsonify([])
        return jsonify(manager.get_all_info())

    @app.route("/api/platform")
    def api_platform() -> Any: # pyright: ignore[reportUnusedFunction]
        """Name of the usage data source in use."""
        tracker = manager.get_plugin("usage_tracker") if manager else None
        try:
            if tracker is not None:
                platform = tracker.platform
            else:
                from ....platform import get_platform
                platform = get_platform()
            return jsonify({"name": platform.name})
        except Exception as e:
            print(f"Error in api_platform: {e}")
            return jsonify({"name": None, "error": str(e)})
