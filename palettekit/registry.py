"""
Command registry for aggregating commands from several parts of a host.

The host's composition root owns one registry and hands it to whoever needs
to contribute commands. There is no module-level instance.

Usage:
    registry = CommandRegistry()
    key = registry.register_commands([Command(id="save", label="Save")])
    unsubscribe = registry.subscribe(lambda: palette.set_items(registry.get_all()))
    ...
    registry.unregister(key)
"""

import itertools
import logging
from collections.abc import Callable, Sequence

from .models import Command

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class CommandRegistry:
    """Named groups of commands plus a subscriber list."""

    def __init__(self) -> None:
        self._commands: dict[str, list[Command]] = {}
        self._listeners: list[Listener] = []
        self._key_counter = itertools.count(1)

    def register(self, key: str, commands: Sequence[Command]) -> None:
        """Register (or replace) the commands contributed under ``key``."""
        self._commands[key] = list(commands)
        logger.debug(f"Registered {len(commands)} command(s) under {key!r}")
        self._notify()

    def register_commands(self, commands: Sequence[Command]) -> str:
        """Register under a generated key and return it."""
        key = f"registration-{next(self._key_counter)}"
        self.register(key, commands)
        return key

    def unregister(self, key: str) -> bool:
        """Remove a registration. Returns True if it existed."""
        if key not in self._commands:
            return False
        del self._commands[key]
        self._notify()
        return True

    def get_all(self) -> list[Command]:
        """All commands, in registration order."""
        return [command for commands in self._commands.values() for command in commands]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.warning(f"Command registry listener failed: {e}")
