"""Persistent toolkit preferences.

Preferences are stored as JSON in an OS-appropriate config directory and
survive restarts.  A missing or unreadable file yields the defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import ToolkitConstants

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "wrap": True,
    "overwrite": False,
    "history_limit": ToolkitConstants.MAX_HISTORY_ENTRIES,
    "queue_size": ToolkitConstants.WORK_QUEUE_SIZE,
}


class Settings:
    """Loads, validates and saves the settings file.

    Values that fail validation are ignored with a warning, so a hand
    edited file can never put the toolkit in a bad state.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir("textpane"))
        self._settings_file = self._config_dir / "settings.json"
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_file(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Dict[str, Any]:
        """Defaults overlaid with every valid value from the settings file."""
        if self._cache is not None:
            return dict(self._cache)

        settings = dict(DEFAULTS)
        for key, value in self._load_file().items():
            if key not in DEFAULTS:
                continue
            if not self.validate_setting(key, value):
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
                continue
            settings[key] = value
        self._cache = settings
        return dict(settings)

    def get(self, key: str) -> Any:
        return self.load()[key]

    def save(self, settings: Dict[str, Any]) -> bool:
        """Write settings atomically (temp file + rename).

        Returns:
            True if the file was written
        """
        for key, value in settings.items():
            if not self.validate_setting(key, value):
                raise ValueError(f"invalid value for {key}: {value!r}")

        merged = self.load()
        merged.update(settings)

        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(merged, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

        self._cache = merged
        return True

    def validate_setting(self, key: str, value: Any) -> bool:
        if key in ("wrap", "overwrite"):
            return isinstance(value, bool)
        if key in ("history_limit", "queue_size"):
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            return value >= 1
        # Unknown keys are kept for forward compatibility
        return True

    def clear_cache(self) -> None:
        self._cache = None


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
