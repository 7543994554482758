"""
Web API plugin serving plugin routes over HTTP.
"""
import threading
import os
from typing import Any, Optional
from ..base import PluginBase
from ..manager import PluginManager
from ...config import WEB_PORT
from . import PLUGIN_INFO


PORT_FILE = os.path.expanduser("~/.local/share/usagetracker_web_port")


class WebPlugin(PluginBase):
    """
    Runs a Flask server in a daemon thread.

    Routes are collected from every other plugin when the server starts.
    """

    def __init__(self) -> None:
        self.server_thread: Optional[threading.Thread] = None
        self.server_port: Optional[int] = None
        self.plugin_manager: Optional[PluginManager] = None
        self.flask_app: Optional[Any] = None

    def get_info(self) -> dict[str, Any]:
        """Return plugin metadata."""
        return PLUGIN_INFO

    def set_plugin_manager(self, manager: PluginManager) -> None:
        """Receive plugin manager reference."""
        self.plugin_manager = manager

    def start(self) -> None:
        """Build the app and start serving."""
        if self.server_port:
            return  # Already started

        from .server import create_app, find_free_port

        try:
            self.flask_app = create_app(self._plugins_with_web(), self.plugin_manager)
            self.server_port = find_free_port(WEB_PORT)

            self.server_thread = threading.Thread(target=self._run_server, daemon=True)
            self.server_thread.start()
            self._write_port_file()

            print(f"Web API at {self.get_url()}")
        except Exception as e:
            print(f"Web server failed: {e}")
            self.server_port = None

    def stop(self) -> None:
        """Daemon thread stops with the main process; drop the port file."""
        if os.path.exists(PORT_FILE):
            try:
                os.remove(PORT_FILE)
            except OSError as e:
                print(f"Could not remove {PORT_FILE}: {e}")

    def _plugins_with_web(self) -> list[PluginBase]:
        if not self.plugin_manager:
            return []
        return [p for p in self.plugin_manager.get_all_plugins() if p is not self]

    def _run_server(self) -> None:
        """Run Flask server (executed in thread)."""
        if self.flask_app and self.server_port:
            self.flask_app.run(
                host="127.0.0.1",
                port=self.server_port,
                debug=False,
                use_reloader=False
            )

    def _write_port_file(self) -> None:
        try:
            os.makedirs(os.path.dirname(PORT_FILE), exist_ok=True)
            with open(PORT_FILE, 'w') as f:
                f.write(str(self.server_port))
        except OSError as e:
            print(f"Could not write {PORT_FILE}: {e}")

    def get_url(self) -> str:
        """Return the web API URL."""
        return f"http://127.0.0.1:{self.server_port or WEB_PORT}"

    def get_port(self) -> Optional[int]:
        """Return the server port if running."""
        return self.server_port
