"""Terminal mode plugin for modeterm.

Makes a modal editing surface cooperate with the terminal session behind
it: leaving INSERT lands in TERMINAL mode, overlapping commands go to the
shell, and the shell cursor follows the editor cursor.
"""

from .. import register_plugin
from .bridge import PositionBridge, offset_to_cell
from .integration import TERMINAL_OVERLAY_BINDINGS, TerminalModeIntegration
from .interceptor import InsertExitInterceptor
from .mode import TerminalMode
from .overlay import ModeKeymapOverlay
from .plugin import TerminalModePlugin
from .remap import SyncThenDelegate, build_overlay_bindings

# Register the plugin
register_plugin(TerminalModePlugin)

__all__ = [
    "InsertExitInterceptor",
    "ModeKeymapOverlay",
    "PositionBridge",
    "SyncThenDelegate",
    "TERMINAL_OVERLAY_BINDINGS",
    "TerminalMode",
    "TerminalModeIntegration",
    "TerminalModePlugin",
    "build_overlay_bindings",
    "offset_to_cell",
]
