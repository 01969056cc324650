"""Hook points and reversible interception hooks.

A HookPoint is a named entry point on an editor surface (for example
"exit_insert") whose behavior can be wrapped. Wrappers ("advice") receive
the next function in the chain as their first argument:

    def around(original, *args, **kwargs):
        ...
        return original(*args, **kwargs)

InterceptionHook owns one piece of advice for one hook point and tracks
whether it is installed, so install/uninstall are idempotent.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable

# Type alias for advice functions
Advice = Callable[..., Any]


class HookPoint:
    """A wrappable entry point with an ordered list of advice."""

    def __init__(self, name: str, func: Callable[..., Any]) -> None:
        self.name = name
        self._func = func
        self._advice: list[Advice] = []

    @property
    def original(self) -> Callable[..., Any]:
        """The unwrapped function."""
        return self._func

    def add_advice(self, advice: Advice) -> None:
        """Wrap the entry point. Later advice runs outermost."""
        self._advice.append(advice)

    def remove_advice(self, advice: Advice) -> None:
        """Remove every occurrence of advice."""
        self._advice = [a for a in self._advice if a is not advice]

    def advice_count(self, advice: Advice | None = None) -> int:
        """Count installed advice, or occurrences of one piece of advice."""
        if advice is None:
            return len(self._advice)
        return sum(1 for a in self._advice if a is advice)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        func = self._func
        for advice in self._advice:
            func = partial(advice, func)
        return func(*args, **kwargs)


class InterceptionHook:
    """Reversible wrapper installed around exactly one hook point."""

    def __init__(self, target: HookPoint, around: Advice) -> None:
        self._target = target
        self._around = around
        self._installed = False

    @property
    def installed(self) -> bool:
        """Whether the wrapper is currently installed."""
        return self._installed

    @property
    def target(self) -> HookPoint:
        """The hook point this wrapper belongs to."""
        return self._target

    def install(self) -> None:
        """Install the wrapper. No-op if already installed."""
        if self._installed:
            return
        self._target.add_advice(self._around)
        self._installed = True

    def uninstall(self) -> None:
        """Remove the wrapper. No-op if not installed."""
        if not self._installed:
            return
        self._target.remove_advice(self._around)
        self._installed = False
