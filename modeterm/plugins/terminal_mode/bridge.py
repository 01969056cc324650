"""Position bridge: pushes the editor cursor into the terminal session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modeterm.terminal.session import CellPosition

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


def offset_to_cell(text: str, offset: int) -> CellPosition:
    """Translate a text offset into a (row, col) cell address."""
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    col = offset - (text.rfind("\n", 0, offset) + 1)
    return (row, col)


class PositionBridge:
    """One-way cursor sync from an editor surface to its terminal."""

    def __init__(self, surface: EditorSurface) -> None:
        self._surface = surface

    def sync(self, position: int) -> None:
        """Tell the terminal session where the editor cursor is.

        No-op unless the surface passes the terminal capability test.
        """
        surface = self._surface
        if not surface.is_terminal_backed():
            return
        surface.terminal.set_cursor(offset_to_cell(surface.text, position))  # type: ignore[union-attr]
