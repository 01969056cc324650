"""TERMINAL mode wiring.

TERMINAL is NORMAL mode acting on behalf of the terminal: its keymap
inherits every NORMAL binding, and the surface's "is normal-like"
predicate is extended so NORMAL-only features keep working in it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from modeterm.core.hooks import InterceptionHook
from modeterm.core.keymap import Keymap
from modeterm.core.modes import EditorMode

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


class TerminalMode:
    """Registers the TERMINAL keymap and normal-like extension on a surface."""

    def __init__(self, surface: EditorSurface) -> None:
        self._surface = surface
        self.keymap = Keymap("terminal", parent=surface.normal_keymap)
        self._normal_like_hook = InterceptionHook(
            surface.hook_point("is_normal_like"), self._around_is_normal_like
        )

    @property
    def installed(self) -> bool:
        return self._normal_like_hook.installed

    def install(self) -> None:
        """Register the mode. No-op if already installed."""
        if self.installed:
            return
        self._surface.mode_keymaps[EditorMode.TERMINAL] = self.keymap
        self._normal_like_hook.install()

    def uninstall(self) -> None:
        """Unregister the mode. No-op if not installed."""
        if not self.installed:
            return
        if self._surface.mode_keymaps.get(EditorMode.TERMINAL) is self.keymap:
            del self._surface.mode_keymaps[EditorMode.TERMINAL]
        self._normal_like_hook.uninstall()

    def _around_is_normal_like(self, original: Callable[[], Any]) -> bool:
        return bool(original()) or self._surface.mode is EditorMode.TERMINAL
