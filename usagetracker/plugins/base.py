"""
Base plugin interface.
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from .manager import PluginManager

WebRoute = tuple[str, Callable[..., Any], list[str]]


class PluginBase(ABC):
    """
    Base class for all usagetracker plugins.

    Plugins extend functionality through:
    - Lifecycle hooks (start/stop)
    - Optional web routes served by the web plugin

    Example:
        class MyPlugin(PluginBase):
            def get_web_routes(self) -> list[WebRoute]:
                return [("/api/my_plugin/ping", self.ping, ["GET"])]
    """

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """
        Return plugin metadata.

        Required keys:
            name: str - Unique plugin identifier
            version: str - Plugin version
        """
        pass

    @abstractmethod
    def start(self) -> None:
        """
        Begin plugin operation.
        Called when the usagetracker service starts.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """
        Stop plugin operation, cleanup resources.
        Called when the usagetracker service stops.
        """
        pass

    # Web Extensions

    def get_web_routes(self) -> list[WebRoute]:
        """
        Return Flask route definitions for the web interface.

        Returns:
            List of (route_path, view_function, methods) tuples
        """
        return []

    # Plugin Manager Access

    def set_plugin_manager(self, manager: 'PluginManager') -> None:
        """
        Receive plugin manager reference.

        Allows plugins to discover other plugins.
        """
        pass
