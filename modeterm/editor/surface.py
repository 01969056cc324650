"""Editing surface.

The EditorSurface is the host side of the adapter: it owns the text, the
cursor position, the current mode and the ordered chain of keymaps that
keys are resolved against. It exposes the seams the terminal mode plugin
hooks into:

    - mode listeners (called with old and new mode on every transition)
    - is_terminal_backed() capability test
    - keymap_chain, a mutable list consulted before the mode keymap
    - normal_keymap, the native NORMAL bindings
    - hook points "exit_insert" and "is_normal_like"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable

from modeterm.core.hooks import HookPoint
from modeterm.core.keymap import (
    Binding,
    CommandFunc,
    Keymap,
    binding_name,
    resolve_key,
    unwrap_binding,
)
from modeterm.core.modes import EditorMode
from modeterm.terminal.commands import TERMINAL_COMMANDS, default_terminal_keymap
from modeterm.terminal.session import TerminalSession

from .commands import EDITOR_COMMANDS, QUICK_MACRO_COMMAND, default_normal_keymap
from .state import EditorState

# Type alias for mode listeners: (old_mode, new_mode)
ModeListener = Callable[[EditorMode, EditorMode], None]

EXIT_KEYS = ("escape", "ctrl+[", "ctrl+left_square_bracket")

INSERT_TEXT_KEYS = {"enter": "\n", "tab": "\t", "space": " "}


@dataclass
class KeyResult:
    """Result of dispatching a key."""

    consumed: bool = True   # Was the key handled?
    command: str | None = None  # Name of the command that ran
    message: str = ""       # Message to display to user


class EditorSurface:
    """A modal editing surface, optionally backed by a terminal session."""

    def __init__(
        self,
        name: str = "*scratch*",
        text: str = "",
        terminal: TerminalSession | None = None,
        normal_keymap: Keymap | None = None,
        commands: Mapping[str, CommandFunc] | None = None,
    ) -> None:
        self.name = name
        self.terminal = terminal
        self._text = text
        self._position = 0
        self._state = EditorState()

        if commands is None:
            commands = {**EDITOR_COMMANDS, **TERMINAL_COMMANDS}
        self.commands: dict[str, CommandFunc] = dict(commands)

        self.normal_keymap = normal_keymap or default_normal_keymap()
        self.mode_keymaps: dict[EditorMode, Keymap] = {EditorMode.NORMAL: self.normal_keymap}
        self.default_keymap = default_terminal_keymap() if terminal is not None else Keymap("global")

        # Consulted before the mode keymap, front = highest precedence
        self.keymap_chain: list[Keymap] = []

        self._mode_listeners: list[ModeListener] = []
        self._hook_points: dict[str, HookPoint] = {
            "exit_insert": HookPoint("exit_insert", self._native_exit_insert),
            "is_normal_like": HookPoint("is_normal_like", self._native_is_normal_like),
        }
        self._replaying = False

    def __repr__(self) -> str:
        return f"EditorSurface({self.name!r}, mode={self.mode.value})"

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def mode(self) -> EditorMode:
        """Current mode."""
        return self._state.mode

    @property
    def state(self) -> EditorState:
        """Current editor state."""
        return self._state

    @property
    def text(self) -> str:
        return self._text

    @property
    def position(self) -> int:
        """Cursor offset into the text."""
        return self._position

    @property
    def macro_recording(self) -> bool:
        return self._state.macro_recording

    def is_terminal_backed(self) -> bool:
        """Whether a usable terminal session is attached."""
        return isinstance(self.terminal, TerminalSession)

    # ─────────────────────────────────────────────────────────────────
    # Hook points and listeners
    # ─────────────────────────────────────────────────────────────────

    def hook_point(self, name: str) -> HookPoint:
        """Get a hook point by name.

        Raises:
            KeyError: If the surface has no such hook point.
        """
        return self._hook_points[name]

    def add_mode_listener(self, listener: ModeListener) -> None:
        """Subscribe to mode changes. Adding the same listener twice is a no-op."""
        if listener not in self._mode_listeners:
            self._mode_listeners.append(listener)

    def remove_mode_listener(self, listener: ModeListener) -> None:
        if listener in self._mode_listeners:
            self._mode_listeners.remove(listener)

    def has_mode_listener(self, listener: ModeListener) -> bool:
        return listener in self._mode_listeners

    # ─────────────────────────────────────────────────────────────────
    # Modes
    # ─────────────────────────────────────────────────────────────────

    def set_mode(self, mode: EditorMode) -> None:
        """Switch mode and notify listeners."""
        old_mode = self._state.mode
        if mode is old_mode:
            return
        self._state.mode = mode
        for listener in list(self._mode_listeners):
            listener(old_mode, mode)

    def enter_insert(self) -> None:
        """Enter INSERT mode. The whole insert session undoes as one step."""
        self._state.push_undo(self._text, self._position)
        self.set_mode(EditorMode.INSERT)

    def exit_insert(self) -> None:
        """Leave INSERT (or KEYPAD) mode through the hookable entry point."""
        self._hook_points["exit_insert"]()

    def _native_exit_insert(self) -> None:
        if self.mode is EditorMode.KEYPAD:
            self.exit_keypad()
        elif self.mode is EditorMode.INSERT:
            self.end_quick_macro()
            self.set_mode(EditorMode.NORMAL)

    def is_normal_like(self) -> bool:
        """Whether the current mode offers NORMAL mode features."""
        return bool(self._hook_points["is_normal_like"]())

    def _native_is_normal_like(self) -> bool:
        return self.mode is EditorMode.NORMAL

    def enter_keypad(self) -> None:
        """Enter KEYPAD mode, remembering where to return."""
        if self.mode is EditorMode.KEYPAD:
            return
        self._state.keypad_return_mode = self.mode
        self.set_mode(EditorMode.KEYPAD)

    def exit_keypad(self) -> None:
        """Leave KEYPAD mode for the mode it was entered from."""
        if self.mode is not EditorMode.KEYPAD:
            return
        target = self._state.keypad_return_mode or EditorMode.NORMAL
        self._state.keypad_return_mode = None
        self.set_mode(target)

    def start_quick_macro(self) -> None:
        self._state.start_macro()

    def end_quick_macro(self) -> None:
        """Stop quick macro recording. No-op when not recording."""
        self._state.stop_macro()

    # ─────────────────────────────────────────────────────────────────
    # Text and position
    # ─────────────────────────────────────────────────────────────────

    def line_start(self, pos: int) -> int:
        return self._text.rfind("\n", 0, pos) + 1

    def line_end(self, pos: int) -> int:
        end = self._text.find("\n", pos)
        return len(self._text) if end == -1 else end

    def move_to(self, pos: int) -> None:
        self._position = max(0, min(pos, len(self._text)))

    def insert_text(self, text: str, record_undo: bool = False) -> None:
        """Insert text at the cursor and move past it."""
        if record_undo:
            self._state.push_undo(self._text, self._position)
        pos = self._position
        self._text = self._text[:pos] + text + self._text[pos:]
        self._position = pos + len(text)

    def delete_range(self, start: int, end: int) -> str:
        """Delete text between offsets and return it. Records undo."""
        start, end = sorted((max(0, start), min(end, len(self._text))))
        if start == end:
            return ""
        self._state.push_undo(self._text, self._position)
        deleted = self._text[start:end]
        self._text = self._text[:start] + self._text[end:]
        self._position = start
        return deleted

    def replace_text(self, text: str, position: int | None = None) -> None:
        """Replace the whole text, e.g. with a refreshed terminal screen."""
        self._text = text
        self.move_to(self._position if position is None else position)

    def undo(self) -> bool:
        """Restore the latest undo record. Returns False if there was none."""
        record = self._state.pop_undo()
        if record is None:
            return False
        self._text = record.text
        self.move_to(record.position)
        return True

    # ─────────────────────────────────────────────────────────────────
    # Key dispatch
    # ─────────────────────────────────────────────────────────────────

    def active_keymaps(self) -> list[Keymap]:
        """Keymaps consulted for the current mode, highest precedence first."""
        keymaps = list(self.keymap_chain)
        mode_keymap = self.mode_keymaps.get(self.mode)
        if mode_keymap is not None:
            keymaps.append(mode_keymap)
        keymaps.append(self.default_keymap)
        return keymaps

    def lookup(self, key: str) -> Binding | None:
        """Resolve a key against the active keymaps."""
        return resolve_key(self.active_keymaps(), key)

    def dispatch(self, key: str) -> KeyResult:
        """Process a key in the current mode.

        Args:
            key: Key name (e.g., "h", "enter", "ctrl+c")

        Returns:
            KeyResult indicating how the key was handled
        """
        mode = self._state.mode

        if mode is EditorMode.INSERT:
            return self._dispatch_insert(key)
        elif mode is EditorMode.KEYPAD:
            return self._dispatch_keypad(key)

        binding = self.lookup(key)
        if binding is None:
            return KeyResult(consumed=False)
        if binding_name(unwrap_binding(binding)) != QUICK_MACRO_COMMAND:
            self._record(key)
        return self.execute(binding)

    def execute(self, binding: Binding) -> KeyResult:
        """Run a binding: a command name or a callable command."""
        if isinstance(binding, str):
            func = self.commands.get(binding)
            if func is None:
                return KeyResult(consumed=False, command=binding, message=f"Unknown command: {binding}")
        else:
            func = binding

        result = func(self)
        message = result if isinstance(result, str) else ""
        return KeyResult(consumed=True, command=binding_name(binding), message=message)

    def _dispatch_insert(self, key: str) -> KeyResult:
        """Handle keys in INSERT mode."""
        self._record(key)

        if key in EXIT_KEYS:
            self.exit_insert()
            return KeyResult(consumed=True, command="exit-insert")

        if self.is_terminal_backed():
            try:
                self.terminal.send_key(key)  # type: ignore[union-attr]
            except ValueError:
                return KeyResult(consumed=False)
            # Mirror the edit locally until the host refreshes from the screen
            self._mirror_insert_key(key)
            return KeyResult(consumed=True)

        if self._mirror_insert_key(key):
            return KeyResult(consumed=True)
        return KeyResult(consumed=False)

    def _mirror_insert_key(self, key: str) -> bool:
        if key == "backspace":
            if self._position > 0:
                self._text = self._text[: self._position - 1] + self._text[self._position :]
                self._position -= 1
            return True
        text = INSERT_TEXT_KEYS.get(key, key if len(key) == 1 else "")
        if not text:
            return False
        self.insert_text(text)
        return True

    def _dispatch_keypad(self, key: str) -> KeyResult:
        """Handle keys in KEYPAD mode: a key x runs the binding of ctrl+x."""
        self._record(key)

        if key in EXIT_KEYS:
            self.exit_insert()
            return KeyResult(consumed=True, command="exit-keypad")

        chord = f"ctrl+{key}" if len(key) == 1 else key
        self.exit_keypad()
        binding = self.lookup(chord)
        if binding is None:
            return KeyResult(consumed=True, message=f"{chord} is undefined")
        return self.execute(binding)

    # ─────────────────────────────────────────────────────────────────
    # Macros
    # ─────────────────────────────────────────────────────────────────

    def _record(self, key: str) -> None:
        if self._state.macro_recording and not self._replaying:
            self._state.macro_keys.append(key)

    def replay_macro(self) -> str | None:
        """Dispatch the keys of the last quick macro."""
        if self._state.macro_recording:
            return "Cannot replay while recording"
        if self._replaying:
            return None
        if not self._state.last_macro:
            return "No macro recorded"
        self._replaying = True
        try:
            for key in self._state.last_macro:
                self.dispatch(key)
        finally:
            self._replaying = False
        return None
