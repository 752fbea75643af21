import os
import json
import platform
from pathlib import Path
from typing import Any, Dict, Optional

SETTINGS_FILE_NAME = "settings.json"


class ConfigStore:
    """User settings for iotconn.

    Only tool settings live here (log level, pattern timeout). Connection
    strings and keys are never written to disk.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else self._get_config_dir()
        self.settings_file = self.base_dir / SETTINGS_FILE_NAME
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / "iotconn"
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "iotconn"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / "iotconn"
            return Path.home() / ".iotconn"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def get_settings(self) -> Dict[str, Any]:
        """Get all settings"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a single setting"""
        return self.get_settings().get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Store a single setting, keeping the others"""
        settings = self.get_settings()
        settings[key] = value
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
