"""Terminal-native commands.

These act on the surface's terminal session instead of its text. They
are the replacement targets of the remap table, so the set of names
registered here is what a remap entry may refer to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modeterm.core.exceptions import PreconditionError
from modeterm.core.keymap import CommandFunc, Keymap

if TYPE_CHECKING:
    from modeterm.editor.surface import EditorSurface

    from .session import TerminalSession


def _session(surface: EditorSurface, command: str) -> TerminalSession:
    if not surface.is_terminal_backed():
        raise PreconditionError(command, surface.name)
    return surface.terminal  # type: ignore[return-value]


def _key_sender(name: str, key: str) -> CommandFunc:
    def command(surface: EditorSurface) -> None:
        _session(surface, name).send_key(key)

    command.__name__ = name.replace("-", "_")
    command.__doc__ = f"Send {key} to the terminal."
    return command


def vterm_cat_kill_line(surface: EditorSurface) -> None:
    """Copy the rest of the line into the kill ring, then kill it in the shell."""
    session = _session(surface, "vterm-cat-kill-line")
    pos = surface.position
    surface.state.push_kill(surface.text[pos:surface.line_end(pos)])
    session.send_key("ctrl+k")


def vterm_yank(surface: EditorSurface) -> str | None:
    """Type the most recent kill into the shell."""
    session = _session(surface, "vterm-yank")
    text = surface.state.last_kill()
    if not text:
        return "Kill ring is empty"
    for char in text:
        session.send_key("enter" if char == "\n" else char)
    return None


TERMINAL_COMMANDS: dict[str, CommandFunc] = {
    "vterm-undo": _key_sender("vterm-undo", "ctrl+_"),
    "vterm-cat-kill-line": vterm_cat_kill_line,
    "vterm-yank": vterm_yank,
    "vterm-delete-char": _key_sender("vterm-delete-char", "delete"),
    "vterm-send-backspace": _key_sender("vterm-send-backspace", "backspace"),
    "vterm-send-return": _key_sender("vterm-send-return", "enter"),
    "vterm-send-escape": _key_sender("vterm-send-escape", "escape"),
    "vterm-send-interrupt": _key_sender("vterm-send-interrupt", "ctrl+c"),
    "vterm-send-eof": _key_sender("vterm-send-eof", "ctrl+d"),
}


DEFAULT_TERMINAL_BINDINGS: dict[str, str] = {
    "ctrl+c": "vterm-send-interrupt",
    "ctrl+d": "vterm-send-eof",
}


def default_terminal_keymap() -> Keymap:
    """Fresh keymap of the terminal session's own bindings."""
    return Keymap("terminal-default", DEFAULT_TERMINAL_BINDINGS)
