"""Insert-exit interceptor.

Wraps the surface's "exit_insert" entry point so that leaving INSERT on a
terminal-backed surface lands in TERMINAL mode instead of NORMAL. Keypad
exit and quick macro handling keep priority, and anything else falls
through to the original behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from modeterm.core.hooks import InterceptionHook
from modeterm.core.modes import EditorMode

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface

    from .bridge import PositionBridge


class InsertExitInterceptor:
    """Diverts INSERT exit into TERMINAL mode while active."""

    def __init__(
        self,
        surface: EditorSurface,
        bridge: PositionBridge,
        is_active: Callable[[], bool],
    ) -> None:
        self._surface = surface
        self._bridge = bridge
        self._is_active = is_active
        self._hook = InterceptionHook(surface.hook_point("exit_insert"), self._around_exit_insert)

    @property
    def installed(self) -> bool:
        return self._hook.installed

    def install(self) -> None:
        self._hook.install()

    def uninstall(self) -> None:
        self._hook.uninstall()

    def _around_exit_insert(self, original: Callable[[], Any]) -> Any:
        surface = self._surface
        mode = surface.mode

        if mode is EditorMode.KEYPAD:
            surface.exit_keypad()
            return None

        if mode is EditorMode.INSERT and surface.macro_recording:
            surface.end_quick_macro()
            return original()

        if mode is EditorMode.INSERT and surface.is_terminal_backed() and self._is_active():
            self._bridge.sync(surface.position)
            surface.set_mode(EditorMode.TERMINAL)
            return None

        return original()
