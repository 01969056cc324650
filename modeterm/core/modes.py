"""Editor modes shared by the surface and the terminal mode plugin."""

from __future__ import annotations

from enum import Enum


class EditorMode(Enum):
    """Modal editing modes."""

    NORMAL = "NORMAL"
    INSERT = "INSERT"
    TERMINAL = "TERMINAL"
    KEYPAD = "KEYPAD"  # Chord-building state
