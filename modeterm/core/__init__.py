"""Core, UI-agnostic models and helpers for modeterm."""

from .exceptions import ConfigurationError, ModetermError, PreconditionError
from .hooks import HookPoint, InterceptionHook
from .keymap import Binding, CommandFunc, Keymap, binding_name, resolve_key, unwrap_binding
from .modes import EditorMode
from .remap import (
    DEFAULT_REMAPS,
    RemapEntry,
    SyncPolicy,
    parse_remap_entries,
    parse_sync_policy,
)
from .remap_manager import RemapManager

__all__ = [
    "Binding",
    "CommandFunc",
    "ConfigurationError",
    "DEFAULT_REMAPS",
    "EditorMode",
    "HookPoint",
    "InterceptionHook",
    "Keymap",
    "ModetermError",
    "PreconditionError",
    "RemapEntry",
    "RemapManager",
    "SyncPolicy",
    "binding_name",
    "parse_remap_entries",
    "parse_sync_policy",
    "resolve_key",
    "unwrap_binding",
]
