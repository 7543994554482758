#!/usr/bin/env python3
"""
Service entry point: loads plugins and keeps the web API running.
"""
import time
import datetime
from .config import DEBUG_MODE, DEBUG_LOG_PATH, LOG_INTERVAL, debug_log
from .plugins import PluginManager


def main() -> None:
    plugin_manager = PluginManager()
    plugin_manager.discover_plugins()
    plugin_manager.set_plugin_manager_for_all()
    plugin_manager.start_all()

    if DEBUG_MODE:
        debug_log("=" * 80)
        debug_log("usagetracker started in DEBUG mode")
        debug_log(f"Plugins: {', '.join(plugin_manager.plugins)}")
        debug_log("=" * 80)
        print(f"Debug logging enabled: {DEBUG_LOG_PATH}")

    print(f"[{datetime.datetime.now().isoformat(timespec='seconds')}] usagetracker_start")

    try:
        while True:
            time.sleep(LOG_INTERVAL)
    except KeyboardInterrupt:
        print("\nusagetracker stopping.")
        debug_log("Stopped by user (KeyboardInterrupt)")
        plugin_manager.stop_all()
        print(f"[{datetime.datetime.now().isoformat(timespec='seconds')}] usagetracker_stop")


if __name__ == "__main__":
    main()
