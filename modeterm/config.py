"""Configuration management for modeterm.

Settings are stored as JSON under CONFIG_DIR. The directory defaults to
~/.modeterm and can be moved with the MODETERM_CONFIG_DIR environment
variable (useful for tests and portable installs).
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol


def _default_config_dir() -> Path:
    override = os.environ.get("MODETERM_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".modeterm"


CONFIG_DIR = _default_config_dir()
SETTINGS_PATH = CONFIG_DIR / "settings.json"
REMAP_DIR = CONFIG_DIR / "remaps"


class SettingsStoreProtocol(Protocol):
    """Anything that can load and save the settings dictionary."""

    def load_all(self) -> dict: ...

    def save_all(self, settings: dict) -> None: ...

    def get(self, key: str, default: Any = None) -> Any: ...


def load_settings(path: Path | None = None) -> dict:
    """Load settings from disk. Missing or unreadable files yield {}."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(settings: dict, path: Path | None = None) -> None:
    """Write settings to disk, creating the config directory if needed."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2, sort_keys=True), encoding="utf-8")


class SettingsStore:
    """JSON-file backed settings store."""

    _instance: SettingsStore | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or SETTINGS_PATH

    @classmethod
    def get_instance(cls) -> SettingsStore:
        """Shared store for the default settings path."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def path(self) -> Path:
        return self._path

    def load_all(self) -> dict:
        return load_settings(self._path)

    def save_all(self, settings: dict) -> None:
        save_settings(settings, self._path)

    def get(self, key: str, default: Any = None) -> Any:
        return self.load_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Update one setting and persist."""
        settings = self.load_all()
        settings[key] = value
        self.save_all(settings)
