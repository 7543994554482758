"""
Flask server for the JSON API with plugin extension support.
"""
from flask import Flask
from typing import Any, List, Optional
import socket


def find_free_port(preferred: int = 5050) -> int:
    """Try preferred port, fall back if unavailable."""
    for port in (preferred, 8080, 5000):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind(("127.0.0.1", port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No free port found ({preferred}/8080/5000 busy)")


def create_app(plugins_with_web: List[Any], manager: Optional[Any] = None) -> Flask:
    """
    Create Flask app with plugin extensions.

    Args:
        plugins_with_web: Plugin instances that provide web routes
        manager: PluginManager used by the core routes, if any
    """
    app = Flask(__name__)

    from .routes import core_routes
    core_routes.register_routes(app, manager)

    for plugin in plugins_with_web:
        try:
            routes = plugin.get_web_routes()
        except Exception as e:
            print(f"Error loading web routes: {e}")
            continue

        for route, handler, methods in routes:
            app.add_url_rule(
                route,
                endpoint=f"{plugin.get_info()['name']}:{route}",
                view_func=handler,
                methods=methods
            )
            print(f"Registered plugin route: {route}")

    return app
