"""
Keyboard-to-action mapping for the palette input.

The mapping itself is stateless; ``KeyboardController`` reads the current
result length and highlighted index through callbacks each time a key
arrives, so it never holds a stale copy of controller state.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Optional

from .hotkeys import KeyEvent

logger = logging.getLogger(__name__)


class KeyAction(Enum):
    """What a key press asks the palette to do."""

    MOVE_NEXT = "move_next"
    MOVE_PREVIOUS = "move_previous"
    CONFIRM = "confirm"
    DISMISS = "dismiss"


def resolve_action(event: KeyEvent) -> Optional[KeyAction]:
    """Map a key event to an action, or None for keys the palette ignores."""
    if event.key == "down":
        return KeyAction.MOVE_NEXT
    if event.key == "up":
        return KeyAction.MOVE_PREVIOUS
    if event.key == "tab":
        return KeyAction.MOVE_PREVIOUS if event.shift else KeyAction.MOVE_NEXT
    if event.key == "enter":
        return KeyAction.CONFIRM
    if event.key == "escape":
        return KeyAction.DISMISS
    return None


def move_index(action: KeyAction, count: int, index: int) -> int:
    """
    Wrapping movement through a list of ``count`` items.

    Empty lists leave the index where it is.
    """
    if count == 0:
        return index
    if action is KeyAction.MOVE_NEXT:
        return index + 1 if index < count - 1 else 0
    if action is KeyAction.MOVE_PREVIOUS:
        return index - 1 if index > 0 else count - 1
    return index


class KeyboardController:
    """Routes palette-input key events to the controller's actions."""

    def __init__(
        self,
        *,
        get_count: Callable[[], int],
        get_index: Callable[[], int],
        on_highlight: Callable[[int], None],
        on_confirm: Callable[[int], None],
        on_dismiss: Callable[[], None],
    ):
        self.get_count = get_count
        self.get_index = get_index
        self.on_highlight = on_highlight
        self.on_confirm = on_confirm
        self.on_dismiss = on_dismiss

    def handle_key(self, event: KeyEvent) -> Optional[KeyAction]:
        """
        Apply the action for ``event``.

        Returns:
            The action taken (the host should suppress the key's default
            behaviour), or None if the key is not a palette key.
        """
        action = resolve_action(event)
        if action is None:
            return None

        if action in (KeyAction.MOVE_NEXT, KeyAction.MOVE_PREVIOUS):
            count = self.get_count()
            if count:
                self.on_highlight(move_index(action, count, self.get_index()))
        elif action is KeyAction.CONFIRM:
            self.on_confirm(self.get_index())
        elif action is KeyAction.DISMISS:
            self.on_dismiss()

        return action
