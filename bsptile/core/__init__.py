"""
bsptile.core - Compositor-facing glue around the tiling engine.

This package contains:
    - manager      : WindowManager - maps compositor events to engine calls
    - commands     : CommandDispatcher - named commands
    - combo_parser : "super+shift+v" -> (modifiers, key)
    - keybinds     : KeybindTable - key presses to commands
"""

from bsptile.core.manager import WindowManager, WMEvent
from bsptile.core.commands import CommandDispatcher, build_default_commands
from bsptile.core.combo_parser import Modifier, ComboParseError, parse_combo
from bsptile.core.keybinds import Keybind, KeybindTable

__all__ = [
    "WindowManager", "WMEvent",
    "CommandDispatcher", "build_default_commands",
    "Modifier", "ComboParseError", "parse_combo",
    "Keybind", "KeybindTable",
]
