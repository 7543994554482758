from usagetracker.plugins.usage_tracker.plugin import UsageTrackerPlugin

if __name__ == "__main__":
    plugin = UsageTrackerPlugin()

    print("=== App Usage (Last 24h) ===")
    result = plugin.get_usage_stats()
    if not result.success:
        print(f"Failed: {result.error}")

    for app in sorted(result.apps, key=lambda a: a.total_foreground_minutes, reverse=True):
        print(f"{app.display_name:20s} {app.total_foreground_minutes:6d} min  {app.category.value}")

    print("\n=== Installed Apps ===")
    for app in plugin.get_installed_apps().apps:
        print(f"{app.display_name:20s} {app.package_id}")
