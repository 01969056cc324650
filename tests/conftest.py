"""Shared fixtures for modeterm tests."""

from __future__ import annotations

from typing import Any

import pytest

from modeterm.editor import EditorSurface


class RecordingTerminal:
    """Terminal session double that records what it is told."""

    def __init__(self) -> None:
        self.cursor_calls: list[tuple[int, int]] = []
        self.keys: list[str] = []

    def set_cursor(self, position: tuple[int, int]) -> None:
        self.cursor_calls.append(position)

    def send_key(self, key: str) -> None:
        self.keys.append(key)


class MockSettingsStore:
    """Mock settings store for testing."""

    def __init__(self, settings: dict | None = None):
        self.settings = settings or {}

    def load_all(self) -> dict:
        return dict(self.settings)

    def save_all(self, settings: dict) -> None:
        self.settings = dict(settings)

    def get(self, key: str, default=None):
        return self.settings.get(key, default)


class MockHost:
    """Minimal plugin host: an active surface and recorded notifications."""

    def __init__(self, surface: EditorSurface | None = None) -> None:
        self.active_surface = surface
        self.notifications: list[tuple[str, str]] = []

    def notify(self, message: str, *, severity: str = "information", **kwargs: Any) -> None:
        self.notifications.append((message, severity))


@pytest.fixture
def make_terminal():
    """Factory for recording terminals."""
    return RecordingTerminal


@pytest.fixture
def terminal() -> RecordingTerminal:
    return RecordingTerminal()


@pytest.fixture
def term_surface(terminal: RecordingTerminal) -> EditorSurface:
    """Terminal-backed surface showing a shell prompt line."""
    return EditorSurface(name="*vterm*", text="$ echo hello world", terminal=terminal)


@pytest.fixture
def plain_surface() -> EditorSurface:
    """Plain text surface with no terminal."""
    return EditorSurface(name="notes.txt", text="first line\nsecond line")


@pytest.fixture
def settings_store():
    return MockSettingsStore()


@pytest.fixture
def make_settings_store():
    return MockSettingsStore


@pytest.fixture
def make_host():
    return MockHost
