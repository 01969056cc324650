"""Tests for keymaps, binding resolution and hook points."""

from __future__ import annotations

from modeterm.core.hooks import HookPoint, InterceptionHook
from modeterm.core.keymap import Keymap, binding_name, resolve_key, unwrap_binding


class TestKeymap:
    def test_lookup_falls_back_to_parent(self):
        parent = Keymap("normal", {"h": "meow-left", "u": "meow-undo"})
        child = Keymap("terminal", {"u": "vterm-undo"}, parent=parent)

        assert child.lookup("u") == "vterm-undo"
        assert child.lookup("h") == "meow-left"
        assert child.lookup("z") is None

    def test_get_local_ignores_parent(self):
        parent = Keymap("normal", {"h": "meow-left"})
        child = Keymap("terminal", parent=parent)

        assert child.get_local("h") is None
        assert "h" not in child

    def test_snapshot_is_detached(self):
        keymap = Keymap("normal", {"h": "meow-left"})
        snapshot = keymap.snapshot()

        keymap.bind("l", "meow-right")
        keymap.unbind("h")

        assert snapshot == {"h": "meow-left"}

    def test_resolve_key_uses_first_match_in_chain(self):
        first = Keymap("overlay", {"u": "vterm-undo"})
        second = Keymap("normal", {"u": "meow-undo", "h": "meow-left"})

        assert resolve_key([first, second], "u") == "vterm-undo"
        assert resolve_key([first, second], "h") == "meow-left"
        assert resolve_key([first, second], "q") is None

    def test_binding_name(self):
        def meow_left(surface):
            return None

        assert binding_name("meow-undo") == "meow-undo"
        assert binding_name(meow_left) == "meow_left"
        assert binding_name(None) is None

    def test_unwrap_binding(self):
        class Wrapper:
            def __init__(self, original):
                self.original = original

            def __call__(self, surface):
                return None

        def meow_left(surface):
            return None

        assert unwrap_binding(Wrapper(Wrapper("meow-quick-kmacro"))) == "meow-quick-kmacro"
        assert unwrap_binding("meow-undo") == "meow-undo"
        assert unwrap_binding(meow_left) is meow_left


class TestHookPoint:
    def test_calls_original_without_advice(self):
        point = HookPoint("double", lambda x: x * 2)
        assert point(3) == 6

    def test_advice_wraps_original(self):
        point = HookPoint("double", lambda x: x * 2)

        def plus_one(original, x):
            return original(x) + 1

        point.add_advice(plus_one)
        assert point(3) == 7

    def test_later_advice_runs_outermost(self):
        calls: list[str] = []
        point = HookPoint("noop", lambda: calls.append("original"))

        def inner(original):
            calls.append("inner")
            return original()

        def outer(original):
            calls.append("outer")
            return original()

        point.add_advice(inner)
        point.add_advice(outer)
        point()

        assert calls == ["outer", "inner", "original"]

    def test_remove_advice_removes_all_occurrences(self):
        point = HookPoint("double", lambda x: x * 2)

        def plus_one(original, x):
            return original(x) + 1

        point.add_advice(plus_one)
        point.add_advice(plus_one)
        point.remove_advice(plus_one)

        assert point.advice_count() == 0
        assert point(3) == 6


class TestInterceptionHook:
    def test_install_twice_is_noop(self):
        point = HookPoint("double", lambda x: x * 2)
        hook = InterceptionHook(point, lambda original, x: original(x) + 1)

        hook.install()
        hook.install()

        assert hook.installed is True
        assert point.advice_count() == 1
        assert point(3) == 7

    def test_uninstall_when_not_installed_is_noop(self):
        point = HookPoint("double", lambda x: x * 2)
        hook = InterceptionHook(point, lambda original, x: original(x) + 1)

        hook.uninstall()

        assert hook.installed is False
        assert point(3) == 6

    def test_uninstall_restores_original(self):
        point = HookPoint("double", lambda x: x * 2)
        hook = InterceptionHook(point, lambda original, x: original(x) + 1)

        hook.install()
        hook.uninstall()
        hook.uninstall()

        assert point.advice_count() == 0
        assert point(3) == 6
