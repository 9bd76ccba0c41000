"""Save and restore the host's focus target around the palette's lifetime."""

import logging
from collections.abc import Callable
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class FocusManager(Protocol):
    def save(self) -> None: ...

    def restore(self) -> None: ...


class FocusTracker:
    """
    Remembers whatever had focus when the palette opened.

    ``get_focus`` returns the host's current focus target (any object);
    ``set_focus`` gives it focus back. Without callbacks this does nothing,
    which suits hosts that manage focus themselves.
    """

    def __init__(
        self,
        get_focus: Optional[Callable[[], Any]] = None,
        set_focus: Optional[Callable[[Any], None]] = None,
    ):
        self.get_focus = get_focus
        self.set_focus = set_focus
        self._saved: Any = None

    @property
    def saved(self) -> Any:
        return self._saved

    def save(self) -> None:
        if self.get_focus is not None:
            self._saved = self.get_focus()

    def restore(self) -> None:
        target, self._saved = self._saved, None
        if target is None or self.set_focus is None:
            return
        try:
            self.set_focus(target)
        except Exception as e:
            logger.debug(f"Could not restore focus to {target!r}: {e}")
