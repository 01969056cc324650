"""Tests for the command remap table."""

from __future__ import annotations

import pytest

from modeterm.core.exceptions import ConfigurationError
from modeterm.core.keymap import Keymap
from modeterm.core.remap import RemapEntry, SyncPolicy, parse_remap_entries, parse_sync_policy
from modeterm.plugins.terminal_mode.bridge import PositionBridge
from modeterm.plugins.terminal_mode.remap import SyncThenDelegate, build_overlay_bindings
from modeterm.terminal.commands import TERMINAL_COMMANDS

SOURCE = {"k1": "meow-undo", "k2": "meow-kill", "k3": "meow-left"}
REMAPS = {"meow-undo": "vterm-undo", "meow-kill": "vterm-cat-kill-line"}


class TestBuildOverlayBindings:
    def test_remapped_keys_bound_to_replacements(self):
        bindings = build_overlay_bindings(REMAPS, SOURCE, TERMINAL_COMMANDS)

        assert bindings == {"k1": "vterm-undo", "k2": "vterm-cat-kill-line"}

    def test_unmapped_key_falls_through_to_parent(self):
        normal = Keymap("normal", SOURCE)
        bindings = build_overlay_bindings(REMAPS, normal.snapshot(), TERMINAL_COMMANDS)
        overlay = Keymap("overlay", bindings)

        from modeterm.core.keymap import resolve_key

        assert "k3" not in overlay
        assert resolve_key([overlay, normal], "k3") == "meow-left"
        assert resolve_key([overlay, normal], "k1") == "vterm-undo"

    def test_entries_absent_from_source_create_no_binding(self):
        remaps = {**REMAPS, "meow-yank": "vterm-yank"}

        bindings = build_overlay_bindings(remaps, SOURCE, TERMINAL_COMMANDS)

        assert "vterm-yank" not in bindings.values()
        assert set(bindings) == {"k1", "k2"}

    def test_accepts_remap_entries(self):
        entries = [RemapEntry("meow-undo", "vterm-undo")]

        bindings = build_overlay_bindings(entries, SOURCE, TERMINAL_COMMANDS)

        assert bindings == {"k1": "vterm-undo"}

    def test_null_replacement_generates_sync_then_delegate(self, term_surface):
        bridge = PositionBridge(term_surface)

        bindings = build_overlay_bindings({"meow-left": None}, SOURCE, TERMINAL_COMMANDS, bridge=bridge)

        command = bindings["k3"]
        assert isinstance(command, SyncThenDelegate)
        assert command.original == "meow-left"
        assert command.name == "sync-then-meow-left"

    def test_null_replacement_without_bridge_fails(self):
        with pytest.raises(ConfigurationError):
            build_overlay_bindings({"meow-left": None}, SOURCE, TERMINAL_COMMANDS)

    def test_wrap_policy_wraps_unmapped_keys(self, term_surface):
        bridge = PositionBridge(term_surface)

        bindings = build_overlay_bindings(
            REMAPS, SOURCE, TERMINAL_COMMANDS, bridge=bridge, policy=SyncPolicy.WRAP
        )

        assert bindings["k1"] == "vterm-undo"
        assert bindings["k2"] == "vterm-cat-kill-line"
        assert isinstance(bindings["k3"], SyncThenDelegate)

    def test_unknown_replacement_fails_naming_entry(self):
        remaps = {"meow-undo": "vterm-undo", "meow-kill": "vterm-frobnicate"}

        with pytest.raises(ConfigurationError) as exc_info:
            build_overlay_bindings(remaps, SOURCE, TERMINAL_COMMANDS)

        assert "vterm-frobnicate" in str(exc_info.value)
        assert "meow-kill" in str(exc_info.value)
        assert exc_info.value.entry == ("meow-kill", "vterm-frobnicate")

    def test_unknown_replacement_fails_even_if_source_unbound(self):
        with pytest.raises(ConfigurationError):
            build_overlay_bindings({"meow-yank": "vterm-nope"}, SOURCE, TERMINAL_COMMANDS)

    def test_built_once_from_snapshot(self):
        normal = Keymap("normal", SOURCE)
        bindings = build_overlay_bindings(REMAPS, normal.snapshot(), TERMINAL_COMMANDS)

        normal.bind("k4", "meow-undo")

        assert "k4" not in bindings


class TestSyncThenDelegate:
    def test_syncs_before_running_original(self, term_surface, terminal):
        term_surface.move_to(6)
        command = SyncThenDelegate(PositionBridge(term_surface), "meow-left")

        term_surface.execute(command)

        assert terminal.cursor_calls == [(0, 6)]
        assert term_surface.position == 5


class TestParseRemapEntries:
    def test_mapping_to_entries(self):
        entries = parse_remap_entries({"meow-undo": "vterm-undo", "meow-left": None})

        assert entries == [RemapEntry("meow-undo", "vterm-undo"), RemapEntry("meow-left", None)]

    @pytest.mark.parametrize(
        "data",
        [
            "meow-undo",
            42,
            {"meow-undo": 3},
            {"meow-undo": ""},
            {"": "vterm-undo"},
            {1: "vterm-undo"},
            [RemapEntry("meow-undo", "vterm-undo"), RemapEntry("meow-undo", "vterm-yank")],
            [("meow-undo", "vterm-undo")],
        ],
    )
    def test_invalid_data_rejected(self, data):
        with pytest.raises(ConfigurationError):
            parse_remap_entries(data)


class TestParseSyncPolicy:
    def test_known_values(self):
        assert parse_sync_policy("hooks") is SyncPolicy.HOOKS
        assert parse_sync_policy(" WRAP ") is SyncPolicy.WRAP
        assert parse_sync_policy(SyncPolicy.WRAP) is SyncPolicy.WRAP

    def test_unknown_value(self):
        with pytest.raises(ConfigurationError):
            parse_sync_policy("sometimes")
