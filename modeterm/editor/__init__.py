"""Reference modal editing surface.

    EditorSurface - text, cursor, mode, keymap chain and hook points
    EditorState - mode, keypad, quick macro, kill ring, undo
    EDITOR_COMMANDS - native commands referenced by the NORMAL keymap
"""

from .commands import (
    DEFAULT_NORMAL_BINDINGS,
    EDITOR_COMMANDS,
    default_normal_keymap,
)
from .state import EditorState, UndoRecord
from .surface import EditorSurface, KeyResult, ModeListener

__all__ = [
    "DEFAULT_NORMAL_BINDINGS",
    "EDITOR_COMMANDS",
    "EditorState",
    "EditorSurface",
    "KeyResult",
    "ModeListener",
    "UndoRecord",
    "default_normal_keymap",
]
