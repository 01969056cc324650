"""Terminal mode plugin.

Connects the terminal mode integration to a Textual host: key events
are converted and routed to the active surface, the integration is
toggled per surface, and the enabled flag is persisted in settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from textual.events import Key

from modeterm.config import SettingsStore, SettingsStoreProtocol
from modeterm.core.exceptions import ConfigurationError, PreconditionError
from modeterm.core.modes import EditorMode
from modeterm.core.remap_manager import RemapManager

from .. import LeaderCommand, Plugin, PluginHost
from .integration import TerminalModeIntegration

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface

ENABLED_SETTINGS_KEY = "terminal_mode_enabled"


class TerminalModePlugin(Plugin):
    """Plugin providing TERMINAL mode for terminal-backed surfaces.

    Features:
    - Leaving INSERT on a terminal surface lands in TERMINAL mode
    - Undo/kill/yank/delete remapped to terminal-native commands
    - Cursor synced into the shell on mode transitions
    - Toggle with <space>t
    """

    name = "terminal_mode"

    def __init__(
        self,
        settings_store: SettingsStoreProtocol | None = None,
        remap_manager: RemapManager | None = None,
    ) -> None:
        self.enabled: bool = False
        self._app: PluginHost | None = None
        self._settings_store = settings_store
        self._remap_manager = remap_manager
        self._integrations: dict[EditorSurface, TerminalModeIntegration] = {}

    @property
    def settings_store(self) -> SettingsStoreProtocol:
        if self._settings_store is None:
            self._settings_store = SettingsStore.get_instance()
        return self._settings_store

    @property
    def remap_manager(self) -> RemapManager:
        if self._remap_manager is None:
            self._remap_manager = RemapManager(settings_store=self.settings_store)
        return self._remap_manager

    def register(self, app: PluginHost) -> None:
        """Remember the host application."""
        self._app = app

    # ─────────────────────────────────────────────────────────────────
    # Surfaces
    # ─────────────────────────────────────────────────────────────────

    def integration_for(self, surface: EditorSurface) -> TerminalModeIntegration:
        """Get (or create) the integration for a surface."""
        integration = self._integrations.get(surface)
        if integration is None:
            manager = self.remap_manager
            integration = TerminalModeIntegration(
                surface,
                remaps=manager.get_remaps(),
                policy=manager.get_sync_policy(),
            )
            self._integrations[surface] = integration
        return integration

    def attach(self, app: PluginHost, surface: EditorSurface) -> bool:
        """Enable the integration on a surface, reporting failures.

        Returns:
            True if the integration is enabled afterwards
        """
        integration = self.integration_for(surface)
        try:
            integration.enable()
        except (PreconditionError, ConfigurationError) as exc:
            self._integrations.pop(surface, None)
            app.notify(str(exc), severity="error")
            return False
        return True

    def detach(self, surface: EditorSurface) -> None:
        """Disable and forget the integration of a surface (e.g. on close)."""
        integration = self._integrations.pop(surface, None)
        if integration is not None:
            integration.disable()

    def detach_all(self) -> None:
        for surface in list(self._integrations):
            self.detach(surface)

    # ─────────────────────────────────────────────────────────────────
    # Key handling
    # ─────────────────────────────────────────────────────────────────

    def on_key(self, app: PluginHost, event: Any) -> bool:
        """Handle key events when terminal mode is enabled.

        Returns True if the key was consumed.
        """
        if not self.enabled:
            return False

        if not isinstance(event, Key):
            return False

        surface = app.active_surface
        if surface is None:
            return False

        result = surface.dispatch(self._convert_key(event))
        if result.message:
            app.notify(result.message)
        return result.consumed

    def _convert_key(self, event: Key) -> str:
        """Convert a Textual Key event to a surface key name."""
        key = event.key

        if key == "ctrl+left_square_bracket":
            return "ctrl+["
        if key in ("enter", "return"):
            return "enter"
        if key in ("backspace", "ctrl+h"):
            return "backspace"
        if key in ("escape", "tab", "space"):
            return key
        if key.startswith("ctrl+"):
            return key

        # Character keys ("$" arrives as "dollar_sign")
        if event.character and len(event.character) == 1 and event.character.isprintable():
            return event.character

        return key

    def on_focus_change(self, app: PluginHost, widget: Any) -> None:
        """Leave INSERT on surfaces that lost focus."""
        if not self.enabled:
            return

        active = app.active_surface
        for surface in list(self._integrations):
            if surface is not active and surface.mode is EditorMode.INSERT:
                surface.exit_insert()

    # ─────────────────────────────────────────────────────────────────
    # Commands and settings
    # ─────────────────────────────────────────────────────────────────

    def get_leader_commands(self) -> list[LeaderCommand]:
        """Provide the terminal mode toggle leader command."""
        return [
            LeaderCommand(
                key="t",
                action="toggle_terminal_mode",
                label="Toggle Terminal Mode",
                category="Actions",
            )
        ]

    def get_settings_defaults(self) -> dict[str, Any]:
        """Default settings for terminal mode."""
        return {
            ENABLED_SETTINGS_KEY: False,
            "terminal_remaps": None,
            "terminal_sync_policy": "hooks",
        }

    def on_settings_load(self, app: PluginHost, settings: dict[str, Any]) -> None:
        """Load remaps, sync policy and the enabled flag from settings.

        Terminal mode only ends up on if it attaches to the active surface.
        """
        self.remap_manager.load_remaps(settings)
        self.remap_manager.load_sync_policy(settings)
        requested = bool(settings.get(ENABLED_SETTINGS_KEY, False))
        self.enabled = False

        surface = app.active_surface
        if requested and surface is not None and surface.is_terminal_backed():
            self.enabled = self.attach(app, surface)

    def on_settings_save(self, app: PluginHost, settings: dict[str, Any]) -> None:
        """Save the enabled flag to settings."""
        settings[ENABLED_SETTINGS_KEY] = self.enabled

    def toggle(self, app: PluginHost) -> None:
        """Toggle terminal mode for the active surface and persist the setting."""
        if self.enabled:
            self.detach_all()
            self.enabled = False
            app.notify("Terminal mode: off")
        else:
            surface = app.active_surface
            if surface is None:
                app.notify("No active surface", severity="warning")
                return
            if not self.attach(app, surface):
                return
            self.enabled = True
            app.notify("Terminal mode: on")

        settings = self.settings_store.load_all()
        settings[ENABLED_SETTINGS_KEY] = self.enabled
        self.settings_store.save_all(settings)
