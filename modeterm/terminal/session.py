"""Terminal session interface and a pyte-backed implementation.

The adapter only needs two things from a terminal session: moving its
cursor to a cell address and sending a raw key. PyteTerminalSession keeps
a pyte screen fed from the process output and turns cursor moves into
arrow-key sequences written back to the process, the same way a shell
is driven from a real terminal.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

import pyte

# Cell address (row, col), zero based
CellPosition = tuple[int, int]

KEY_SEQUENCES: dict[str, str] = {
    "enter": "\r",
    "return": "\r",
    "tab": "\t",
    "escape": "\x1b",
    "backspace": "\x7f",
    "delete": "\x1b[3~",
    "space": " ",
    "up": "\x1b[A",
    "down": "\x1b[B",
    "right": "\x1b[C",
    "left": "\x1b[D",
    "home": "\x1b[H",
    "end": "\x1b[F",
    "ctrl+_": "\x1f",
    "ctrl+underscore": "\x1f",
    "ctrl+[": "\x1b",
    "ctrl+left_square_bracket": "\x1b",
}


@runtime_checkable
class TerminalSession(Protocol):
    """What the adapter needs from a terminal session."""

    def set_cursor(self, position: CellPosition) -> None: ...

    def send_key(self, key: str) -> None: ...


def encode_key(key: str) -> str:
    """Translate a key name into the bytes a terminal would send.

    Raises:
        ValueError: If the key has no terminal encoding.
    """
    if key in KEY_SEQUENCES:
        return KEY_SEQUENCES[key]
    if key.startswith("ctrl+") and len(key) == 6 and key[5].isalpha():
        return chr(ord(key[5].lower()) - ord("a") + 1)
    if len(key) == 1:
        return key
    raise ValueError(f"No terminal encoding for key: {key}")


class PyteTerminalSession:
    """Terminal session backed by a pyte screen.

    Output written towards the process goes to ``writer``; without a writer
    it is buffered and can be collected with ``read_output()``.
    """

    def __init__(
        self,
        columns: int = 80,
        lines: int = 24,
        writer: Callable[[str], None] | None = None,
    ) -> None:
        self.screen = pyte.Screen(columns, lines)
        self.stream = pyte.Stream(self.screen)
        self._writer = writer
        self._output: list[str] = []
        # Cursor column requested by the last set_cursor, valid until the
        # screen cursor moves (i.e. the process echoes the movement)
        self._requested: CellPosition | None = None
        self._seen_at_request: CellPosition | None = None

    @property
    def cursor(self) -> CellPosition:
        """Current screen cursor as (row, col)."""
        return (self.screen.cursor.y, self.screen.cursor.x)

    @property
    def display(self) -> list[str]:
        """Rendered screen lines."""
        return list(self.screen.display)

    def feed(self, data: str) -> None:
        """Feed output from the process into the screen."""
        self.stream.feed(data)

    def read_output(self) -> str:
        """Return and clear buffered output (only used without a writer)."""
        data = "".join(self._output)
        self._output.clear()
        return data

    def set_cursor(self, position: CellPosition) -> None:
        """Move the shell cursor to position on the current line.

        A shell can only move its cursor within the line being edited, so
        requests for other rows are ignored.
        """
        row, col = position
        current = self.cursor
        if row != current[0]:
            return

        col = max(0, min(col, self.screen.columns - 1))
        base = current[1]
        if self._requested is not None and self._seen_at_request == current:
            # Previous request not echoed yet, count from where it will land
            base = self._requested[1]

        delta = col - base
        if delta > 0:
            self._write(KEY_SEQUENCES["right"] * delta)
        elif delta < 0:
            self._write(KEY_SEQUENCES["left"] * -delta)

        self._requested = (row, col)
        self._seen_at_request = current

    def send_key(self, key: str) -> None:
        """Send one key to the process."""
        self._requested = None
        self._write(encode_key(key))

    def _write(self, data: str) -> None:
        if not data:
            return
        if self._writer is not None:
            self._writer(data)
        else:
            self._output.append(data)
