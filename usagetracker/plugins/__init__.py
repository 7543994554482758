"""
Plugin system for usagetracker.
"""
from .base import PluginBase, WebRoute
from .manager import PluginManager

__all__ = ["PluginBase", "PluginManager", "WebRoute"]
