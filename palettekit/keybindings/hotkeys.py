"""
Key events and global hotkey matching.

Hotkey descriptors are ``+``-separated strings such as ``"mod+k"`` or
``"ctrl+shift+p"``. ``mod`` is the platform's primary modifier: the command
key on macOS, control everywhere else.
"""

import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from ..exceptions import HotkeyParseError

logger = logging.getLogger(__name__)

IS_MAC = sys.platform == "darwin"

# Host key names -> canonical names
KEY_ALIASES = {
    "arrowdown": "down",
    "arrowup": "up",
    "arrowleft": "left",
    "arrowright": "right",
    "return": "enter",
    "esc": "escape",
    " ": "space",
}

MODIFIER_ALIASES = {
    "mod": "mod",
    "ctrl": "ctrl",
    "control": "ctrl",
    "meta": "meta",
    "cmd": "meta",
    "command": "meta",
    "super": "meta",
    "shift": "shift",
    "alt": "alt",
    "option": "alt",
}


def normalize_key(name: str) -> str:
    """Canonical lower-case key name (``ArrowDown`` -> ``down``)."""
    lowered = name if name == " " else name.strip().lower()
    return KEY_ALIASES.get(lowered, lowered)


@dataclass(frozen=True)
class KeyEvent:
    """A key press as delivered by the host, with modifier state."""

    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", normalize_key(self.key))

    @classmethod
    def parse(cls, combo: str) -> "KeyEvent":
        """
        Build an event from a combination string like ``"shift+tab"``.

        ``backtab`` (what terminals report for shift+tab) maps to tab with
        shift held.
        """
        parts = [p for p in combo.split("+") if p] or [combo]
        modifiers = {MODIFIER_ALIASES.get(p.strip().lower()) for p in parts[:-1]}
        key = parts[-1]
        shift = "shift" in modifiers
        if key.strip().lower() == "backtab":
            key, shift = "tab", True
        return cls(
            key=key,
            shift=shift,
            ctrl="ctrl" in modifiers,
            alt="alt" in modifiers,
            meta="meta" in modifiers,
        )


@dataclass(frozen=True)
class Hotkey:
    """A parsed hotkey descriptor."""

    key: str
    mod: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    alt: bool = False
    source: str = ""

    def matches(self, event: KeyEvent, is_mac: Optional[bool] = None) -> bool:
        """
        Check whether ``event`` triggers this hotkey.

        Shift and alt must match exactly; ctrl/meta must be held when named
        (directly or through ``mod``).
        """
        if event.key != self.key:
            return False

        mac = IS_MAC if is_mac is None else is_mac
        needs_ctrl = self.ctrl or (self.mod and not mac)
        needs_meta = self.meta or (self.mod and mac)

        if needs_ctrl and not event.ctrl:
            return False
        if needs_meta and not event.meta:
            return False
        return event.shift == self.shift and event.alt == self.alt


def parse_hotkey(descriptor: str) -> Hotkey:
    """
    Parse a hotkey descriptor.

    Raises:
        HotkeyParseError: For empty descriptors, unknown modifiers, or a
            descriptor made only of modifiers
    """
    if not isinstance(descriptor, str) or not descriptor.strip():
        raise HotkeyParseError("Hotkey must be a non-empty string", hotkey=descriptor)

    parts = [p.strip().lower() for p in descriptor.split("+")]
    if any(not p for p in parts):
        raise HotkeyParseError("Hotkey has an empty segment", hotkey=descriptor)

    *modifier_parts, key = parts
    if key in MODIFIER_ALIASES:
        raise HotkeyParseError("Hotkey has no key", hotkey=descriptor)

    modifiers = set()
    for part in modifier_parts:
        canonical = MODIFIER_ALIASES.get(part)
        if canonical is None:
            raise HotkeyParseError(f"Unknown modifier '{part}'", hotkey=descriptor)
        modifiers.add(canonical)

    return Hotkey(
        key=normalize_key(key),
        mod="mod" in modifiers,
        ctrl="ctrl" in modifiers,
        meta="meta" in modifiers,
        shift="shift" in modifiers,
        alt="alt" in modifiers,
        source=descriptor,
    )


class HotkeyListener:
    """
    Toggles the palette on configured global hotkeys.

    ``handle`` returns True when the event was consumed; the host must then
    suppress the default action for that key combination.
    """

    def __init__(
        self,
        hotkeys: Union[str, Sequence[str]],
        on_trigger: Callable[[], None],
        is_mac: Optional[bool] = None,
    ):
        descriptors = [hotkeys] if isinstance(hotkeys, str) else list(hotkeys)
        self.hotkeys = [parse_hotkey(d) for d in descriptors]
        self.on_trigger = on_trigger
        self.is_mac = is_mac

    def matches(self, event: KeyEvent) -> bool:
        return any(h.matches(event, self.is_mac) for h in self.hotkeys)

    def handle(self, event: KeyEvent) -> bool:
        if not self.matches(event):
            return False
        logger.debug(f"Hotkey matched: {event}")
        self.on_trigger()
        return True
