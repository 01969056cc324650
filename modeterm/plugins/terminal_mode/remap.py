"""Command remap table.

Builds the overlay bindings from a snapshot of the NORMAL keymap: every
key whose command has a terminal-native replacement is rebound to it.
The table is resolved once; later changes to the NORMAL keymap are not
picked up until the overlay is rebuilt.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from modeterm.core.exceptions import ConfigurationError
from modeterm.core.keymap import Binding, CommandFunc, binding_name
from modeterm.core.remap import RemapEntry, SyncPolicy, parse_remap_entries

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface

    from .bridge import PositionBridge


class SyncThenDelegate:
    """Generated command: sync the cursor into the terminal, then run original."""

    def __init__(self, bridge: PositionBridge, original: Binding) -> None:
        self.bridge = bridge
        self.original = original

    @property
    def name(self) -> str:
        return f"sync-then-{binding_name(self.original)}"

    def __repr__(self) -> str:
        return f"SyncThenDelegate({binding_name(self.original)!r})"

    def __call__(self, surface: EditorSurface) -> str | None:
        self.bridge.sync(surface.position)
        result = surface.execute(self.original)
        return result.message or None


def build_overlay_bindings(
    remap_entries: Mapping[str, str | None] | Iterable[RemapEntry],
    source_keymap: Mapping[str, Binding],
    terminal_commands: Mapping[str, CommandFunc],
    bridge: PositionBridge | None = None,
    policy: SyncPolicy = SyncPolicy.HOOKS,
) -> dict[str, Binding]:
    """Build overlay bindings from a source keymap snapshot.

    Args:
        remap_entries: Editor command -> terminal command (or None)
        source_keymap: Snapshot of the NORMAL keymap bindings
        terminal_commands: Terminal command registry replacements must exist in
        bridge: Position bridge for generated sync-then-delegate commands
        policy: Whether unmapped keys are also wrapped

    Returns:
        Key -> binding for the overlay. Keys without a remap are left out
        (they fall through to NORMAL) unless policy is WRAP.

    Raises:
        ConfigurationError: On malformed entries or unknown replacements.
            Nothing is returned in that case.
    """
    data: Any = remap_entries
    if not isinstance(data, Mapping):
        data = list(data)
    entries = parse_remap_entries(data)

    for entry in entries:
        if entry.replacement is not None and entry.replacement not in terminal_commands:
            raise ConfigurationError(
                f'Unknown terminal command "{entry.replacement}" in remap entry "{entry.source}"',
                entry=(entry.source, entry.replacement),
            )

    needs_bridge = policy is SyncPolicy.WRAP or any(e.replacement is None for e in entries)
    if needs_bridge and bridge is None:
        raise ConfigurationError("Sync-then-delegate bindings need a position bridge.")

    table = {entry.source: entry.replacement for entry in entries}
    bindings: dict[str, Binding] = {}

    for key, binding in source_keymap.items():
        command = binding if isinstance(binding, str) else None
        if command is not None and command in table:
            replacement = table[command]
            bindings[key] = replacement if replacement is not None else SyncThenDelegate(bridge, binding)  # type: ignore[arg-type]
        elif policy is SyncPolicy.WRAP:
            bindings[key] = SyncThenDelegate(bridge, binding)  # type: ignore[arg-type]

    return bindings
