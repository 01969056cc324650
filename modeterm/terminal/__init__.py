"""Terminal session side of the adapter."""

from .commands import (
    DEFAULT_TERMINAL_BINDINGS,
    TERMINAL_COMMANDS,
    default_terminal_keymap,
)
from .session import (
    KEY_SEQUENCES,
    CellPosition,
    PyteTerminalSession,
    TerminalSession,
    encode_key,
)

__all__ = [
    "CellPosition",
    "DEFAULT_TERMINAL_BINDINGS",
    "KEY_SEQUENCES",
    "PyteTerminalSession",
    "TERMINAL_COMMANDS",
    "TerminalSession",
    "default_terminal_keymap",
    "encode_key",
]
