"""Per-surface lifecycle of the terminal mode integration.

enable() and disable() each run a fixed sequence of sub-activations:

    enable:  check surface -> build overlay -> install TERMINAL mode
             -> install insert-exit interceptor -> subscribe to mode changes
    disable: unsubscribe -> remove overlay -> uninstall interceptor
             -> uninstall TERMINAL mode -> leave TERMINAL for NORMAL

Everything that can fail runs before the first mutation, so a failed
enable leaves the surface exactly as it was.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from modeterm.core.exceptions import ConfigurationError, PreconditionError
from modeterm.core.keymap import Binding, CommandFunc
from modeterm.core.modes import EditorMode
from modeterm.core.remap import DEFAULT_REMAPS, RemapEntry, SyncPolicy

from .bridge import PositionBridge
from .interceptor import InsertExitInterceptor
from .mode import TerminalMode
from .overlay import ModeKeymapOverlay
from .remap import build_overlay_bindings

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


# Terminal-specific keys, layered over the remapped ones
TERMINAL_OVERLAY_BINDINGS: dict[str, Binding] = {
    "enter": "vterm-send-return",
}


class TerminalModeIntegration:
    """Binds one editor surface to its terminal session."""

    def __init__(
        self,
        surface: EditorSurface,
        remaps: Mapping[str, str | None] | Iterable[RemapEntry] | None = None,
        policy: SyncPolicy = SyncPolicy.HOOKS,
        terminal_commands: Mapping[str, CommandFunc] | None = None,
    ) -> None:
        self.surface = surface
        self.remaps = list(DEFAULT_REMAPS) if remaps is None else remaps
        self.policy = policy
        self._terminal_commands = surface.commands if terminal_commands is None else terminal_commands

        self.bridge = PositionBridge(surface)
        self.terminal_mode = TerminalMode(surface)
        self.interceptor = InsertExitInterceptor(surface, self.bridge, lambda: self._enabled)
        self.overlay: ModeKeymapOverlay | None = None
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        """Turn the integration on. No-op if already enabled.

        Raises:
            PreconditionError: If the surface is not terminal-backed.
            ConfigurationError: If the remap table is invalid or names a
                command missing from the surface registry.
        """
        if self._enabled:
            return

        surface = self.surface
        if not surface.is_terminal_backed():
            raise PreconditionError("Enabling terminal mode", surface.name)

        bindings = build_overlay_bindings(
            self.remaps,
            surface.normal_keymap.snapshot(),
            self._terminal_commands,
            bridge=self.bridge,
            policy=self.policy,
        )
        for key, command in TERMINAL_OVERLAY_BINDINGS.items():
            if isinstance(command, str) and command not in self._terminal_commands:
                raise ConfigurationError(
                    f'Unknown terminal command "{command}" bound to "{key}"',
                    entry=(key, command),
                )
            bindings[key] = command

        self.overlay = ModeKeymapOverlay("terminal-overlay", bindings)
        self.terminal_mode.install()
        self.interceptor.install()
        surface.add_mode_listener(self._on_mode_change)
        self._enabled = True

    def disable(self) -> None:
        """Turn the integration off. No-op if not enabled."""
        if not self._enabled:
            return

        surface = self.surface
        surface.remove_mode_listener(self._on_mode_change)
        if self.overlay is not None:
            self.overlay.deactivate(surface)
        self.interceptor.uninstall()
        self.terminal_mode.uninstall()
        self._enabled = False
        self.overlay = None

        if surface.state.keypad_return_mode is EditorMode.TERMINAL:
            surface.state.keypad_return_mode = EditorMode.NORMAL
        if surface.mode is EditorMode.TERMINAL:
            surface.set_mode(EditorMode.NORMAL)

    def _on_mode_change(self, old_mode: EditorMode, new_mode: EditorMode) -> None:
        if self.overlay is None:
            return

        if new_mode is EditorMode.INSERT:
            self.bridge.sync(self.surface.position)

        if new_mode is EditorMode.TERMINAL:
            self.overlay.activate(self.surface)
        elif old_mode is EditorMode.TERMINAL:
            self.overlay.deactivate(self.surface)
