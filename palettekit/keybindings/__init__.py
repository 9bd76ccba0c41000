"""
Keyboard handling for the palette.

Provides:
- KeyEvent / Hotkey / HotkeyListener: global hotkey matching
- KeyboardController / KeyAction: in-palette navigation keys
"""

from .hotkeys import Hotkey, HotkeyListener, KeyEvent, normalize_key, parse_hotkey
from .keyboard import KeyAction, KeyboardController, move_index, resolve_action

__all__ = [
    "Hotkey",
    "HotkeyListener",
    "KeyAction",
    "KeyEvent",
    "KeyboardController",
    "move_index",
    "normalize_key",
    "parse_hotkey",
    "resolve_action",
]
