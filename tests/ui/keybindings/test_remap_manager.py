"""Tests for the RemapManager."""

from __future__ import annotations

import json
from pathlib import Path

from modeterm.core.remap import DEFAULT_REMAPS, RemapEntry, SyncPolicy
from modeterm.core.remap_manager import RemapManager


class TestRemapManager:
    """Test the RemapManager class."""

    def test_initialize_with_no_remaps(self, make_settings_store):
        """Should keep the shipped remaps when nothing is configured."""
        manager = RemapManager(settings_store=make_settings_store({}))

        settings = manager.initialize()

        assert settings == {}
        assert manager.get_remaps() == list(DEFAULT_REMAPS)
        assert manager.get_sync_policy() is SyncPolicy.HOOKS
        assert manager.get_remap_path() is None

    def test_initialize_with_default_setting(self, make_settings_store):
        """Should keep the shipped remaps when set to 'default'."""
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": "default"}))

        manager.initialize()

        assert manager.get_remaps() == list(DEFAULT_REMAPS)

    def test_inline_remaps(self, make_settings_store):
        """Should accept an inline mapping."""
        store = make_settings_store({"terminal_remaps": {"meow-undo": "vterm-undo", "meow-left": None}})
        manager = RemapManager(settings_store=store)

        manager.initialize()

        assert manager.get_remaps() == [
            RemapEntry("meow-undo", "vterm-undo"),
            RemapEntry("meow-left", None),
        ]

    def test_load_remaps_from_file(self, tmp_path: Path, make_settings_store):
        """Should load remaps from a JSON file."""
        remap_file = tmp_path / "shell.json"
        remap_file.write_text(json.dumps({"remaps": {"meow-kill": "vterm-cat-kill-line"}}), encoding="utf-8")
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": str(remap_file)}))

        manager.initialize()

        assert manager.get_remaps() == [RemapEntry("meow-kill", "vterm-cat-kill-line")]
        assert manager.get_remap_path() == remap_file

    def test_load_remaps_by_name(self, tmp_path: Path, monkeypatch, make_settings_store):
        """Should look up bare names in the remap directory."""
        monkeypatch.setattr("modeterm.core.remap_manager.REMAP_DIR", tmp_path)
        (tmp_path / "zsh.json").write_text(json.dumps({"meow-yank": "vterm-yank"}), encoding="utf-8")
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": "zsh"}))

        manager.initialize()

        assert manager.get_remaps() == [RemapEntry("meow-yank", "vterm-yank")]
        assert manager.get_remap_path() == tmp_path / "zsh.json"

    def test_invalid_json(self, tmp_path: Path, capsys, make_settings_store):
        """Should handle invalid JSON gracefully."""
        remap_file = tmp_path / "invalid.json"
        remap_file.write_text("not valid json", encoding="utf-8")
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": str(remap_file)}))

        manager.initialize()

        captured = capsys.readouterr()
        assert "[modeterm] Failed to load terminal remaps" in captured.err
        assert manager.get_remaps() == list(DEFAULT_REMAPS)
        assert manager.get_remap_path() is None

    def test_missing_file(self, tmp_path: Path, capsys, make_settings_store):
        """Should handle a missing file gracefully."""
        remap_file = tmp_path / "nonexistent.json"
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": str(remap_file)}))

        manager.initialize()

        captured = capsys.readouterr()
        assert "Remap file not found" in captured.err
        assert manager.get_remaps() == list(DEFAULT_REMAPS)

    def test_invalid_entries(self, capsys, make_settings_store):
        """Should reject malformed inline entries and keep the defaults."""
        manager = RemapManager(settings_store=make_settings_store({"terminal_remaps": {"meow-undo": 5}}))

        manager.initialize()

        assert "Failed to load terminal remaps" in capsys.readouterr().err
        assert manager.get_remaps() == list(DEFAULT_REMAPS)

    def test_sync_policy(self, make_settings_store):
        """Should read the sync policy."""
        manager = RemapManager(settings_store=make_settings_store({"terminal_sync_policy": "wrap"}))

        manager.initialize()

        assert manager.get_sync_policy() is SyncPolicy.WRAP

    def test_unknown_sync_policy(self, capsys, make_settings_store):
        """Should warn and keep the default sync policy."""
        manager = RemapManager(settings_store=make_settings_store({"terminal_sync_policy": "often"}))

        manager.initialize()

        assert "[modeterm]" in capsys.readouterr().err
        assert manager.get_sync_policy() is SyncPolicy.HOOKS

    def test_reset_to_default(self, make_settings_store):
        """Should restore the shipped remaps and policy."""
        store = make_settings_store(
            {"terminal_remaps": {"meow-undo": "vterm-undo"}, "terminal_sync_policy": "wrap"}
        )
        manager = RemapManager(settings_store=store)
        manager.initialize()

        manager.reset_to_default()

        assert manager.get_remaps() == list(DEFAULT_REMAPS)
        assert manager.get_sync_policy() is SyncPolicy.HOOKS
