"""Editor state management.

Tracks the current mode, keypad state, quick macro recording, the kill
ring and the undo stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from modeterm.core.modes import EditorMode

KILL_RING_MAX = 60
UNDO_MAX = 200


@dataclass
class UndoRecord:
    """Text and cursor position before an edit."""

    text: str
    position: int


@dataclass
class EditorState:
    """Tracks all modal editing state for one surface.

    - Current mode (exactly one at a time)
    - Mode to return to when keypad exits
    - Quick macro recording and the last recorded macro
    - Kill ring and undo stack
    """

    mode: EditorMode = EditorMode.NORMAL

    # Keypad (chord-building) state
    keypad_return_mode: EditorMode | None = None

    # Quick macro state
    macro_recording: bool = False
    macro_keys: list[str] = field(default_factory=list)
    last_macro: list[str] = field(default_factory=list)

    kill_ring: list[str] = field(default_factory=list)
    undo_stack: list[UndoRecord] = field(default_factory=list)

    def push_kill(self, text: str) -> None:
        """Add text to the front of the kill ring."""
        if not text:
            return
        self.kill_ring.insert(0, text)
        del self.kill_ring[KILL_RING_MAX:]

    def last_kill(self) -> str:
        """Most recent kill, or empty string."""
        return self.kill_ring[0] if self.kill_ring else ""

    def push_undo(self, text: str, position: int) -> None:
        """Record state before an edit. Consecutive duplicates are skipped."""
        if self.undo_stack and self.undo_stack[-1].text == text:
            return
        self.undo_stack.append(UndoRecord(text, position))
        del self.undo_stack[:-UNDO_MAX]

    def pop_undo(self) -> UndoRecord | None:
        """Pop the latest undo record."""
        return self.undo_stack.pop() if self.undo_stack else None

    def start_macro(self) -> None:
        """Start recording a quick macro."""
        self.macro_recording = True
        self.macro_keys = []

    def stop_macro(self) -> None:
        """Stop recording and keep the recorded keys as the last macro."""
        if not self.macro_recording:
            return
        self.macro_recording = False
        self.last_macro = list(self.macro_keys)
        self.macro_keys = []
