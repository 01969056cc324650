"""Remap table management for modeterm."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from modeterm.config import REMAP_DIR, SettingsStoreProtocol

from .exceptions import ConfigurationError
from .remap import (
    DEFAULT_REMAPS,
    RemapEntry,
    SyncPolicy,
    parse_remap_entries,
    parse_sync_policy,
)

REMAPS_SETTINGS_KEY = "terminal_remaps"
SYNC_POLICY_SETTINGS_KEY = "terminal_sync_policy"


class RemapManager:
    """Loads the terminal remap table and sync policy from settings.

    The "terminal_remaps" setting is either an inline mapping
    ({"meow-undo": "vterm-undo", ...}) or the name/path of a JSON file
    holding such a mapping. Files are looked up in REMAP_DIR unless an
    absolute or home-relative path is given.
    """

    def __init__(
        self,
        settings_store: SettingsStoreProtocol | None = None,
    ) -> None:
        from modeterm.config import SettingsStore

        self._settings_store = settings_store or SettingsStore.get_instance()
        self._remaps: list[RemapEntry] = list(DEFAULT_REMAPS)
        self._sync_policy = SyncPolicy.HOOKS
        self._remap_path: Path | None = None

    def initialize(self) -> dict:
        """Load remaps and sync policy from settings.

        Returns:
            The loaded settings dictionary.
        """
        settings = self._settings_store.load_all()
        self.load_remaps(settings)
        self.load_sync_policy(settings)
        return settings

    def load_remaps(self, settings: dict) -> None:
        """Load the remap table from settings if specified.

        Args:
            settings: Settings dictionary containing the terminal_remaps key.
        """
        value = settings.get(REMAPS_SETTINGS_KEY)
        if value is None:
            return
        if isinstance(value, str) and value.strip() in ("", "default"):
            return

        try:
            if isinstance(value, str):
                path = self._resolve_remap_path(value.strip())
                entries = self._load_remaps_from_file(path)
            else:
                path = None
                entries = parse_remap_entries(value)
        except (ConfigurationError, ValueError) as exc:
            print(
                f"[modeterm] Failed to load terminal remaps '{value}': {exc}",
                file=sys.stderr,
            )
            return

        self._remaps = entries
        self._remap_path = path

    def load_sync_policy(self, settings: dict) -> None:
        """Load the sync policy from settings, keeping the default on error."""
        value = settings.get(SYNC_POLICY_SETTINGS_KEY)
        if value is None:
            return
        try:
            self._sync_policy = parse_sync_policy(value)
        except ConfigurationError as exc:
            print(f"[modeterm] {exc}; using '{self._sync_policy.value}'", file=sys.stderr)

    def _resolve_remap_path(self, name: str) -> Path:
        """Resolve a remap table name to a file path.

        Args:
            name: Name of the remap table (without .json) or a path.

        Returns:
            Path to the remap JSON file.
        """
        if name.startswith(("~", "/")) or Path(name).is_absolute():
            return Path(name).expanduser()

        stem = Path(name).stem
        return REMAP_DIR / f"{stem}.json"

    def _load_remaps_from_file(self, path: Path) -> list[RemapEntry]:
        """Load remap entries from a JSON file.

        Args:
            path: Path to the remap JSON file.

        Returns:
            Validated remap entries.

        Raises:
            ValueError: If the file is missing or not valid JSON.
            ConfigurationError: If the entries have the wrong shape.
        """
        path = path.expanduser()
        if not path.exists():
            raise ValueError(f"Remap file not found: {path}")

        try:
            payload: Any = json.loads(path.read_text(encoding="utf-8"))
        except Exception as exc:
            raise ValueError(f"Failed to read remap JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise ValueError("Remap file must contain a JSON object.")

        remap_data = payload.get("remaps", payload)
        return parse_remap_entries(remap_data)

    def get_remaps(self) -> list[RemapEntry]:
        """Get the active remap entries."""
        return list(self._remaps)

    def get_sync_policy(self) -> SyncPolicy:
        """Get the active sync policy."""
        return self._sync_policy

    def get_remap_path(self) -> Path | None:
        """Get the file the remaps were loaded from, if any."""
        return self._remap_path

    def reset_to_default(self) -> None:
        """Reset to the shipped remap table and sync policy."""
        self._remaps = list(DEFAULT_REMAPS)
        self._sync_policy = SyncPolicy.HOOKS
        self._remap_path = None
