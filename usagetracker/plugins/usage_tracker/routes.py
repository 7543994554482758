"""
usagetracker/plugins/usage_tracker/routes.py

Flask route handlers for the usage API.

Every handler answers HTTP 200; failures travel in the payload.
"""
from flask import jsonify, request
from typing import Any, Dict, Optional
from ...models import UsageStatsResult


def _parse_epoch_ms(params: Dict[str, Any], key: str) -> Optional[int]:
    """Read an optional epoch-millisecond value."""
    value = params.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"Invalid {key}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid {key}: {value!r}") from None


class UsageTrackerRoutes:
    """Flask route handlers for the usage tracker plugin."""

    def __init__(self, plugin: Any) -> None:
        self.plugin = plugin

    def api_usage_stats(self) -> Any:
        """Usage stats for startTime/endTime given as query args or JSON body."""
        params: Dict[str, Any] = request.args.to_dict()
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            params.update(body)

        try:
            start_time = _parse_epoch_ms(params, "startTime")
            end_time = _parse_epoch_ms(params, "endTime")
        except ValueError as e:
            return jsonify(UsageStatsResult.failure(str(e)).to_dict())

        result = self.plugin.get_usage_stats(start_time, end_time)
        return jsonify(result.to_dict())

    def api_permission(self) -> Any:
        """GET checks usage access, POST requests it."""
        if request.method == "POST":
            result = self.plugin.request_usage_stats_permission()
        else:
            result = self.plugin.has_usage_stats_permission()
        return jsonify(result.to_dict())

    def api_installed_apps(self) -> Any:
        return jsonify(self.plugin.get_installed_apps().to_dict())
