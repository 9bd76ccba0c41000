"""Navigation stack for nested command groups."""

import logging
from collections.abc import Sequence
from typing import Optional

from ..models import Command, PageFrame

logger = logging.getLogger(__name__)


class PageStack:
    """
    Tracks how deep drill-down navigation has gone.

    The empty stack is the root page, where ``root_items`` are visible.
    """

    def __init__(self, root_items: Sequence[Command] = ()):
        self.root_items: list[Command] = list(root_items)
        self._frames: list[PageFrame] = []

    @property
    def current_items(self) -> list[Command]:
        if self._frames:
            return list(self._frames[-1].items)
        return self.root_items

    @property
    def current_page(self) -> Optional[Command]:
        """The branch whose children are shown, or None at root."""
        return self._frames[-1].command if self._frames else None

    @property
    def breadcrumb(self) -> list[Command]:
        return [frame.command for frame in self._frames]

    @property
    def can_go_back(self) -> bool:
        return bool(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push_page(self, command: Command) -> bool:
        """Enter a branch. Returns False (no-op) for leaves."""
        if not command.children:
            return False
        self._frames.append(PageFrame(command=command, items=command.children))
        logger.debug(f"Entered page {command.id!r} (depth {len(self._frames)})")
        return True

    def pop_page(self) -> bool:
        """Leave the current page. Returns False (no-op) at root."""
        if not self._frames:
            return False
        frame = self._frames.pop()
        logger.debug(f"Left page {frame.command.id!r} (depth {len(self._frames)})")
        return True

    def reset(self) -> None:
        self._frames.clear()
