"""Keymaps and binding resolution.

A Keymap maps key names (Textual style: "a", "enter", "ctrl+c") to
bindings. A binding is either a command identifier resolved through a
command registry, or a callable command taking the editor surface.
Keymaps can have a parent that is consulted when a key is unbound.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable, Union

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


# Type alias for callable commands
CommandFunc = Callable[["EditorSurface"], Any]

# A binding is a command name or a callable command
Binding = Union[str, CommandFunc]


class Keymap:
    """Named key -> binding table with an optional parent keymap."""

    def __init__(
        self,
        name: str,
        bindings: Mapping[str, Binding] | None = None,
        parent: Keymap | None = None,
    ) -> None:
        self.name = name
        self.parent = parent
        self._bindings: dict[str, Binding] = dict(bindings or {})

    def __repr__(self) -> str:
        return f"Keymap({self.name!r}, {len(self._bindings)} bindings)"

    def __contains__(self, key: str) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def bind(self, key: str, binding: Binding) -> None:
        """Bind a key in this keymap (parents are untouched)."""
        self._bindings[key] = binding

    def unbind(self, key: str) -> None:
        """Remove a key from this keymap if present."""
        self._bindings.pop(key, None)

    def get_local(self, key: str) -> Binding | None:
        """Look up a key in this keymap only."""
        return self._bindings.get(key)

    def lookup(self, key: str) -> Binding | None:
        """Look up a key here, then in the parent chain."""
        keymap: Keymap | None = self
        while keymap is not None:
            binding = keymap._bindings.get(key)
            if binding is not None:
                return binding
            keymap = keymap.parent
        return None

    def snapshot(self) -> dict[str, Binding]:
        """Copy of the local bindings, detached from later changes."""
        return dict(self._bindings)


def resolve_key(keymaps: Iterable[Keymap], key: str) -> Binding | None:
    """Return the first binding for key across an ordered keymap chain."""
    for keymap in keymaps:
        binding = keymap.lookup(key)
        if binding is not None:
            return binding
    return None


def unwrap_binding(binding: Binding) -> Binding:
    """Innermost binding of a generated wrapper command (one with ``original``)."""
    while not isinstance(binding, str) and hasattr(binding, "original"):
        binding = binding.original
    return binding


def binding_name(binding: Binding | None) -> str | None:
    """Human-readable name for a binding."""
    if binding is None:
        return None
    if isinstance(binding, str):
        return binding
    return getattr(binding, "name", None) or getattr(binding, "__name__", repr(binding))
