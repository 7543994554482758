"""Device app-usage statistics exposed through a plugin bridge."""

__version__ = "1.0.0"
