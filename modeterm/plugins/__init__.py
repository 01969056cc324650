"""Plugin system for modeterm.

Plugins extend a host application with optional features like terminal
mode. Each plugin is a self-contained module that registers hooks with
the host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface


class PluginHost(Protocol):
    """What plugins need from the host application.

    A Textual App satisfies ``notify``; the host adds ``active_surface``.
    """

    @property
    def active_surface(self) -> EditorSurface | None: ...

    def notify(self, message: str, *, severity: str = "information", **kwargs: Any) -> None: ...


@dataclass
class LeaderCommand:
    """Definition of a leader command provided by a plugin."""

    key: str  # The key to press (e.g., "t")
    action: str  # The action name (e.g., "toggle_terminal_mode")
    label: str  # Display label (e.g., "Toggle Terminal Mode")
    category: str  # For grouping in menu ("Actions", "View", etc.)
    guard: str | None = None  # Optional guard function name


class Plugin(ABC):
    """Base class for modeterm plugins.

    Plugins extend the host with optional features. They:
    - Register themselves with the host at startup
    - Can intercept and handle key events
    - Can provide leader commands (<space>+key)
    - Can persist settings
    """

    name: str = "unnamed"  # Unique plugin identifier

    @abstractmethod
    def register(self, app: PluginHost) -> None:
        """Called when the host initializes. Set up the plugin here.

        Args:
            app: The host application instance
        """

    def on_key(self, app: PluginHost, event: Any) -> bool:
        """Handle a key event.

        Args:
            app: The host application instance
            event: The key event from Textual

        Returns:
            True if the key was consumed, False to let it propagate
        """
        return False

    def on_focus_change(self, app: PluginHost, widget: Any) -> None:
        """Called when focus changes in the host."""

    def get_leader_commands(self) -> list[LeaderCommand]:
        """Return leader commands this plugin provides."""
        return []

    def get_settings_defaults(self) -> dict[str, Any]:
        """Return default settings for this plugin.

        Returns:
            Dictionary of setting_name -> default_value
        """
        return {}

    def on_settings_load(self, app: PluginHost, settings: dict[str, Any]) -> None:
        """Called when settings are loaded."""

    def on_settings_save(self, app: PluginHost, settings: dict[str, Any]) -> None:
        """Called before settings are saved. Modify settings dict to persist plugin state."""


# Plugin registry
_plugins: list[type[Plugin]] = []


def register_plugin(plugin_cls: type[Plugin]) -> type[Plugin]:
    """Decorator to register a plugin class.

    Usage:
        @register_plugin
        class MyPlugin(Plugin):
            ...
    """
    if plugin_cls not in _plugins:
        _plugins.append(plugin_cls)
    return plugin_cls


def discover_plugins() -> list[type[Plugin]]:
    """Discover and return all registered plugin classes.

    This imports plugin modules which triggers their registration.

    Returns:
        List of plugin classes
    """
    from . import terminal_mode  # noqa: F401

    return _plugins.copy()


def get_registered_plugins() -> list[type[Plugin]]:
    """Get already registered plugins without triggering discovery."""
    return _plugins.copy()
