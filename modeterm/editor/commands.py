"""Native editor commands and the default NORMAL mode keymap.

Commands are plain functions taking the surface. They are registered by
name and keymaps refer to them by that name, so a remap table can swap
a name for a terminal-native command without touching the keymap.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from modeterm.core.keymap import CommandFunc, Keymap

if TYPE_CHECKING:
    from .surface import EditorSurface


WORD = re.compile(r"\w+")

QUICK_MACRO_COMMAND = "meow-quick-kmacro"


# ─────────────────────────────────────────────────────────────────
# Movement
# ─────────────────────────────────────────────────────────────────


def meow_left(surface: EditorSurface) -> None:
    """Move one character left, stopping at line start."""
    pos = surface.position
    if pos > surface.line_start(pos):
        surface.move_to(pos - 1)


def meow_right(surface: EditorSurface) -> None:
    """Move one character right, stopping at line end."""
    pos = surface.position
    if pos < surface.line_end(pos):
        surface.move_to(pos + 1)


def meow_line_start(surface: EditorSurface) -> None:
    surface.move_to(surface.line_start(surface.position))


def meow_line_end(surface: EditorSurface) -> None:
    surface.move_to(surface.line_end(surface.position))


def meow_next_word(surface: EditorSurface) -> None:
    """Move to the start of the next word."""
    text, pos = surface.text, surface.position
    for match in WORD.finditer(text):
        if match.start() > pos:
            surface.move_to(match.start())
            return
    surface.move_to(len(text))


def meow_back_word(surface: EditorSurface) -> None:
    """Move to the start of the previous word."""
    text, pos = surface.text, surface.position
    target = 0
    for match in WORD.finditer(text):
        if match.start() >= pos:
            break
        target = match.start()
    surface.move_to(target)


# ─────────────────────────────────────────────────────────────────
# Mode switches
# ─────────────────────────────────────────────────────────────────


def meow_insert(surface: EditorSurface) -> None:
    surface.enter_insert()


def meow_append(surface: EditorSurface) -> None:
    """Move past the character under the cursor, then insert."""
    pos = surface.position
    if pos < surface.line_end(pos):
        surface.move_to(pos + 1)
    surface.enter_insert()


def meow_keypad(surface: EditorSurface) -> str | None:
    """Start a keypad chord. Only available in normal-like modes."""
    if not surface.is_normal_like():
        return f"Keypad is not available in {surface.mode.value} mode"
    surface.enter_keypad()
    return None


# ─────────────────────────────────────────────────────────────────
# Editing
# ─────────────────────────────────────────────────────────────────


def meow_delete(surface: EditorSurface) -> None:
    """Delete the character under the cursor."""
    pos = surface.position
    if pos < surface.line_end(pos):
        surface.delete_range(pos, pos + 1)


def meow_backward_delete(surface: EditorSurface) -> None:
    """Delete the character before the cursor."""
    pos = surface.position
    if pos > surface.line_start(pos):
        surface.delete_range(pos - 1, pos)


def meow_kill(surface: EditorSurface) -> None:
    """Kill from the cursor to the end of the line."""
    pos = surface.position
    end = surface.line_end(pos)
    if end == pos and end < len(surface.text):
        end += 1  # At line end, kill the newline
    killed = surface.delete_range(pos, end)
    surface.state.push_kill(killed)


def meow_yank(surface: EditorSurface) -> str | None:
    """Insert the most recent kill at the cursor."""
    text = surface.state.last_kill()
    if not text:
        return "Kill ring is empty"
    surface.insert_text(text, record_undo=True)
    return None


def meow_undo(surface: EditorSurface) -> str | None:
    if not surface.undo():
        return "No further undo information"
    return None


# ─────────────────────────────────────────────────────────────────
# Macros
# ─────────────────────────────────────────────────────────────────


def meow_quick_kmacro(surface: EditorSurface) -> str:
    """Toggle quick macro recording."""
    if surface.state.macro_recording:
        surface.end_quick_macro()
        return "Macro recorded"
    surface.start_quick_macro()
    return "Recording macro..."


def meow_call_kmacro(surface: EditorSurface) -> str | None:
    """Replay the last quick macro."""
    return surface.replay_macro()


EDITOR_COMMANDS: dict[str, CommandFunc] = {
    "meow-left": meow_left,
    "meow-right": meow_right,
    "meow-line-start": meow_line_start,
    "meow-line-end": meow_line_end,
    "meow-next-word": meow_next_word,
    "meow-back-word": meow_back_word,
    "meow-insert": meow_insert,
    "meow-append": meow_append,
    "meow-keypad": meow_keypad,
    "meow-delete": meow_delete,
    "meow-backward-delete": meow_backward_delete,
    "meow-kill": meow_kill,
    "meow-yank": meow_yank,
    "meow-undo": meow_undo,
    QUICK_MACRO_COMMAND: meow_quick_kmacro,
    "meow-call-kmacro": meow_call_kmacro,
}


DEFAULT_NORMAL_BINDINGS: dict[str, str] = {
    "h": "meow-left",
    "left": "meow-left",
    "l": "meow-right",
    "right": "meow-right",
    "0": "meow-line-start",
    "$": "meow-line-end",
    "w": "meow-next-word",
    "b": "meow-back-word",
    "i": "meow-insert",
    "a": "meow-append",
    "x": "meow-delete",
    "backspace": "meow-backward-delete",
    "s": "meow-kill",
    "p": "meow-yank",
    "u": "meow-undo",
    "space": "meow-keypad",
    "Q": QUICK_MACRO_COMMAND,
    "@": "meow-call-kmacro",
}


def default_normal_keymap() -> Keymap:
    """Fresh NORMAL mode keymap with the default bindings."""
    return Keymap("normal", DEFAULT_NORMAL_BINDINGS)
