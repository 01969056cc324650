"""Remap table types and validation.

A remap table maps editor command identifiers to terminal-native command
identifiers. A None replacement asks for a generated command that syncs
the cursor position into the terminal before running the original editor
command.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError


class SyncPolicy(Enum):
    """How unmapped keys keep the terminal cursor coherent."""

    HOOKS = "hooks"  # Sync only on mode transitions
    WRAP = "wrap"    # Also wrap every unmapped key with sync-then-delegate


@dataclass(frozen=True)
class RemapEntry:
    """One editor command -> terminal command (or None) mapping."""

    source: str
    replacement: str | None = None


DEFAULT_REMAPS: tuple[RemapEntry, ...] = (
    RemapEntry("meow-undo", "vterm-undo"),
    RemapEntry("meow-kill", "vterm-cat-kill-line"),
    RemapEntry("meow-yank", "vterm-yank"),
    RemapEntry("meow-delete", "vterm-delete-char"),
    RemapEntry("meow-backward-delete", "vterm-send-backspace"),
)


def parse_sync_policy(value: Any) -> SyncPolicy:
    """Parse a sync policy setting ("hooks" or "wrap")."""
    if isinstance(value, SyncPolicy):
        return value
    if isinstance(value, str):
        try:
            return SyncPolicy(value.strip().lower())
        except ValueError:
            pass
    raise ConfigurationError(f"Unknown sync policy: {value!r}")


def parse_remap_entries(data: Any) -> list[RemapEntry]:
    """Validate remap data and return entries.

    Accepts a mapping of command id -> command id or None, or an iterable
    of RemapEntry. Keys must be unique non-empty strings.

    Raises:
        ConfigurationError: If any entry has the wrong shape.
    """
    if isinstance(data, Mapping):
        items: Iterable[Any] = (RemapEntry(k, v) if isinstance(k, str) else (k, v) for k, v in data.items())
    elif isinstance(data, (list, tuple)):
        items = data
    else:
        raise ConfigurationError("Remap table must be a mapping of command -> command or null.")

    entries: list[RemapEntry] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, RemapEntry):
            raise ConfigurationError(f"Invalid remap entry: {item!r}", entry=_as_pair(item))

        source, replacement = item.source, item.replacement
        if not isinstance(source, str) or not source:
            raise ConfigurationError(
                f"Remap source must be a non-empty string: {source!r}",
                entry=(source, replacement),
            )
        if replacement is not None and (not isinstance(replacement, str) or not replacement):
            raise ConfigurationError(
                f'Remap replacement for "{source}" must be a command name or null.',
                entry=(source, replacement),
            )
        if source in seen:
            raise ConfigurationError(f'Duplicate remap entry for "{source}".', entry=(source, replacement))

        seen.add(source)
        entries.append(item)

    return entries


def _as_pair(item: Any) -> tuple[object, object] | None:
    if isinstance(item, tuple) and len(item) == 2:
        return item
    return None
