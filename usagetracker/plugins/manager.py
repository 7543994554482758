"""
usagetracker/plugins/manager.py

Plugin discovery and lifecycle management.
"""
import os
import importlib
from typing import Any, Optional
from .base import PluginBase


class PluginManager:
    """
    Discovers and manages plugins in the usagetracker/plugins directory.

    Usage:
        manager = PluginManager()
        manager.discover_plugins()
        manager.set_plugin_manager_for_all()
        manager.start_all()
    """

    def __init__(self) -> None:
        self.plugins: dict[str, PluginBase] = {}

    def discover_plugins(self) -> None:
        """
        Scan plugins/ directory and load all valid plugins.

        A valid plugin is a directory containing:
        - __init__.py with PLUGIN_INFO dict
        - plugin.py with a class implementing PluginBase
        """
        plugins_dir = os.path.dirname(__file__)

        for item in sorted(os.listdir(plugins_dir)):
            item_path = os.path.join(plugins_dir, item)

            # Skip non-directories and special files
            if not os.path.isdir(item_path) or item.startswith('_'):
                continue

            try:
                module = importlib.import_module(f"usagetracker.plugins.{item}")

                if not hasattr(module, 'PLUGIN_INFO'):
                    print(f"Warning: Plugin '{item}' missing PLUGIN_INFO, skipping")
                    continue

                plugin_module = importlib.import_module(f"usagetracker.plugins.{item}.plugin")

                # Find class that inherits from PluginBase
                plugin_class = None
                for attr_name in dir(plugin_module):
                    attr = getattr(plugin_module, attr_name)
                    if (isinstance(attr, type) and
                        issubclass(attr, PluginBase) and
                        attr is not PluginBase):
                        plugin_class = attr
                        break

                if plugin_class is None:
                    print(f"Warning: Plugin '{item}' has no PluginBase class, skipping")
                    continue

                self.register(plugin_class())

            except Exception as e:
                print(f"Error loading plugin '{item}': {e}")

    def register(self, plugin: PluginBase) -> None:
        """Add an already constructed plugin."""
        info = plugin.get_info()
        self.plugins[info['name']] = plugin
        print(f"Discovered plugin: {info['name']} v{info['version']}")

    def start_all(self) -> None:
        """Start all plugins."""
        for name, plugin in self.plugins.items():
            try:
                print(f"Starting plugin: {name}")
                plugin.start()
            except Exception as e:
                print(f"Failed to start plugin '{name}': {e}")

    def stop_all(self) -> None:
        """Stop all plugins (cleanup resources)."""
        for name, plugin in self.plugins.items():
            try:
                print(f"Stopping plugin: {name}")
                plugin.stop()
            except Exception as e:
                print(f"Failed to stop plugin '{name}': {e}")

    def get_plugin(self, name: str) -> Optional[PluginBase]:
        """Get a specific plugin by name."""
        return self.plugins.get(name)

    def get_all_plugins(self) -> list[PluginBase]:
        """Get all loaded plugins."""
        return list(self.plugins.values())

    def get_all_info(self) -> list[dict[str, Any]]:
        """Metadata of every loaded plugin."""
        return [plugin.get_info() for plugin in self.plugins.values()]

    def set_plugin_manager_for_all(self) -> None:
        """Pass plugin manager reference to every plugin."""
        for plugin in self.plugins.values():
            plugin.set_plugin_manager(self)
