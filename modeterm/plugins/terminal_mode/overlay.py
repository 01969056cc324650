"""Mode-keymap overlay.

The overlay is a keymap placed at the front of a surface's keymap chain
while TERMINAL mode is active, so terminal-specific and remapped keys
win over the NORMAL bindings they shadow.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from modeterm.core.exceptions import PreconditionError
from modeterm.core.keymap import Binding, Keymap

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


class ModeKeymapOverlay:
    """A keymap that can be layered above a surface's bindings."""

    def __init__(
        self,
        name: str,
        bindings: Mapping[str, Binding],
        parent: Keymap | None = None,
    ) -> None:
        self.keymap = Keymap(name, bindings, parent=parent)

    @property
    def name(self) -> str:
        return self.keymap.name

    def is_active(self, surface: EditorSurface) -> bool:
        return any(keymap is self.keymap for keymap in surface.keymap_chain)

    def activate(self, surface: EditorSurface) -> None:
        """Put the overlay at the front of the surface's keymap chain.

        Raises:
            PreconditionError: If the surface is not terminal-backed.
        """
        if not surface.is_terminal_backed():
            raise PreconditionError(f"Activating the {self.name} overlay", surface.name)
        if self.is_active(surface):
            return
        surface.keymap_chain.insert(0, self.keymap)

    def deactivate(self, surface: EditorSurface) -> None:
        """Remove every instance of the overlay from the chain."""
        surface.keymap_chain[:] = [k for k in surface.keymap_chain if k is not self.keymap]
