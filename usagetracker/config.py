import os
import json
import datetime
from typing import Any, Dict, List, Optional

PLATFORM_OVERRIDE: str = os.environ.get("USAGETRACKER_PLATFORM", "").lower()
ADB_PATH: str = os.environ.get("USAGETRACKER_ADB", "adb")
DEVICE_SERIAL: Optional[str] = os.environ.get("USAGETRACKER_DEVICE") or None
# Package whose usage-access grant is checked on the device
APP_PACKAGE: str = os.environ.get("USAGETRACKER_PACKAGE", "app.lovable.screenwise")
WEB_PORT: int = int(os.environ.get("USAGETRACKER_PORT", "5050"))
LOG_INTERVAL: int = 2

MS_PER_MINUTE: int = 60_000

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/usagetracker/settings.json")

# Debug mode - logs detailed query information
DEBUG_MODE: bool = os.environ.get("USAGETRACKER_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.expanduser("~/.local/share/usagetracker_debug.log")


def debug_log(message: str) -> None:
    """Write debug message to log file if debug mode is enabled."""
    if DEBUG_MODE:
        timestamp = datetime.datetime.now().isoformat(timespec='milliseconds')
        os.makedirs(os.path.dirname(DEBUG_LOG_PATH), exist_ok=True)
        with open(DEBUG_LOG_PATH, 'a') as f:
            f.write(f"[{timestamp}] {message}\n")


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages dynamic settings loaded from the user's JSON file.

    Values can be reloaded at runtime; anything missing or malformed
    falls back to the class defaults.
    """
    DEFAULT_LOOKBACK_HOURS: int = 24
    DEFAULT_MIN_FOREGROUND_MS: int = MS_PER_MINUTE
    DEFAULT_ADB_TIMEOUT_SEC: int = 60

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.lookback_hours: int = self.DEFAULT_LOOKBACK_HOURS
        self.min_foreground_ms: int = self.DEFAULT_MIN_FOREGROUND_MS
        self.adb_timeout_sec: int = self.DEFAULT_ADB_TIMEOUT_SEC
        # Raw rule definitions; None means the built-in table
        self.category_rules: Optional[List[Dict[str, Any]]] = None

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                print(f"Ignoring settings in {self.config_path}: expected a JSON object")
            except (json.JSONDecodeError, IOError) as e:
                print(f"Ignoring unreadable settings in {self.config_path}: {e}")
        return {}

    def reload(self) -> None:
        """Reload configuration from disk, updating this object's attributes."""
        self._user_config = self._load_user_config()

        self.lookback_hours = self._get_int('lookback_hours', self.DEFAULT_LOOKBACK_HOURS)
        self.min_foreground_ms = self._get_int('min_foreground_ms', self.DEFAULT_MIN_FOREGROUND_MS)
        self.adb_timeout_sec = self._get_int('adb_timeout_sec', self.DEFAULT_ADB_TIMEOUT_SEC)

        rules = self._user_config.get('category_rules')
        if rules is not None and not isinstance(rules, list):
            print(f"Ignoring category_rules in {self.config_path}: expected a list")
            rules = None
        self.category_rules = rules

    def _get_int(self, key: str, default: int) -> int:
        """Non-negative integer setting, or the default when missing or invalid."""
        value = self._user_config.get(key, default)
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return value
        print(f"Ignoring {key} in {self.config_path}: expected a non-negative integer, got {value!r}")
        return default

    @property
    def lookback_ms(self) -> int:
        return int(self.lookback_hours) * 60 * MS_PER_MINUTE


# Shared instance imported by the rest of the package
settings = Config()
