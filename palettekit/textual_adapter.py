"""
Textual host integration.

Connects a ``PaletteController`` to a Textual app: key events in, timers on
the app's event loop, focus saved and restored through ``app.focused``.
Drawing the palette stays with the host's own widgets.

Usage:
    class MyApp(App):
        def on_mount(self) -> None:
            self.palette = create_textual_palette(self, COMMANDS, self.run_command)

        def on_key(self, event: events.Key) -> None:
            dispatch_textual_key(self.palette, event)
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from textual import events
from textual.app import App
from textual.timer import Timer

from .engine.controller import PaletteController
from .engine.focus import FocusTracker
from .keybindings.hotkeys import KeyEvent
from .models import Command

logger = logging.getLogger(__name__)


def key_event_from_textual(event: events.Key) -> KeyEvent:
    """Convert a Textual key event (``"ctrl+k"``, ``"shift+tab"``, ...)."""
    return KeyEvent.parse(event.key)


class _TimerHandle:
    def __init__(self, timer: Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Runs animation timers with ``app.set_timer``."""

    def __init__(self, app: App):
        self.app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> _TimerHandle:
        return _TimerHandle(self.app.set_timer(delay, callback))


class TextualFocus(FocusTracker):
    """Remembers ``app.focused`` on open and refocuses it on close."""

    def __init__(self, app: App):
        super().__init__(get_focus=lambda: app.focused, set_focus=lambda widget: widget.focus())


def create_textual_palette(
    app: App,
    items: Sequence[Command],
    on_select: Callable[[Command], None],
    **options: Any,
) -> PaletteController:
    """
    Build a controller wired to ``app``.

    Terminals never deliver the command key, so ``mod`` hotkeys resolve to
    ctrl regardless of platform unless ``is_mac`` is passed explicitly.
    """
    options.setdefault("scheduler", TextualScheduler(app))
    options.setdefault("focus", TextualFocus(app))
    options.setdefault("is_mac", False)
    return PaletteController(items, on_select, **options)


def dispatch_textual_key(controller: PaletteController, event: events.Key) -> bool:
    """
    Route a Textual key event to the palette.

    Global hotkeys are checked first; other keys only reach the palette
    while it is open. Handled events have their default action suppressed.
    """
    key_event = key_event_from_textual(event)
    handled = controller.handle_global_key(key_event)
    if not handled and controller.is_open:
        handled = controller.handle_key(key_event)
    if handled:
        logger.debug(f"Palette handled key {event.key!r}")
        event.prevent_default()
        event.stop()
    return handled
