"""Bounded most-recently-used list of selected commands."""

import logging
from typing import Optional

from ..config.constants import DEFAULT_RECENT_MAX, DEFAULT_RECENT_STORAGE_KEY
from ..models import Command
from ..storage import RecentStore

logger = logging.getLogger(__name__)


class RecencyTracker:
    """
    Most-recent-first list, deduplicated by command id.

    Read once from the store on creation and written back after every
    update. Store failures never escape: a failed read yields an empty list
    and a failed write is logged and ignored.
    """

    def __init__(
        self,
        store: Optional[RecentStore] = None,
        *,
        enabled: bool = True,
        max_items: int = DEFAULT_RECENT_MAX,
        storage_key: str = DEFAULT_RECENT_STORAGE_KEY,
    ):
        self.store = store
        self.enabled = enabled
        self.max_items = max_items
        self.storage_key = storage_key
        self._items: list[Command] = self._read() if enabled else []

    @property
    def items(self) -> list[Command]:
        return list(self._items)

    def _read(self) -> list[Command]:
        if self.store is None:
            return []
        try:
            loaded = self.store.read(self.storage_key)
        except Exception as e:
            logger.warning(f"Could not read recent commands ({self.storage_key}): {e}")
            return []
        if not isinstance(loaded, list) or not all(isinstance(c, Command) for c in loaded):
            logger.warning(f"Ignoring malformed recent commands ({self.storage_key})")
            return []
        return self._dedupe(loaded)[: self.max_items]

    @staticmethod
    def _dedupe(commands: list[Command]) -> list[Command]:
        seen: set[str] = set()
        result = []
        for command in commands:
            if command.id not in seen:
                seen.add(command.id)
                result.append(command)
        return result

    def _write(self) -> None:
        if self.store is None:
            return
        try:
            self.store.write(self.storage_key, list(self._items))
        except Exception as e:
            logger.warning(f"Could not save recent commands ({self.storage_key}): {e}")

    def add(self, command: Command) -> None:
        """Move ``command`` to the front, trimming to ``max_items``."""
        if not self.enabled:
            return
        self._items = [command, *(c for c in self._items if c.id != command.id)][: self.max_items]
        self._write()

    def clear(self) -> None:
        if not self.enabled:
            return
        self._items = []
        self._write()
