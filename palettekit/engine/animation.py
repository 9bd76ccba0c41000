"""
Mount/transition state machine for the overlay.

    open:  -> entering --(duration)--> entered
    close: -> exiting  --(duration)--> exited (unmounted)

A zero duration jumps straight to the settled state. Each new transition
cancels the previous one's pending timer and starts its own from zero.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional, Protocol

from ..config.constants import DEFAULT_ANIMATION_DURATION_MS
from ..models import AnimationState

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs a callback once after a delay; the handle cancels it."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules timers on the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class AnimationLifecycle:
    """Tracks ``entering | entered | exiting | exited`` plus mounted-ness."""

    def __init__(
        self,
        duration_ms: float = DEFAULT_ANIMATION_DURATION_MS,
        *,
        initially_open: bool = False,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[AnimationState], None]] = None,
    ):
        self.duration_ms = duration_ms
        self.scheduler = scheduler or AsyncioScheduler()
        self.on_change = on_change
        self._is_open = initially_open
        self._state = AnimationState.ENTERED if initially_open else AnimationState.EXITED
        self._timer: Optional[TimerHandle] = None
        self._transition_id = 0

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_mounted(self) -> bool:
        return self._state.is_mounted

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def _set_state(self, state: AnimationState) -> None:
        if state is self._state:
            return
        logger.debug(f"Animation {self._state.value} -> {state.value}")
        self._state = state
        if self.on_change:
            self.on_change(state)

    def cancel(self) -> None:
        """Drop any pending timer without changing state."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def transition(self, is_open: bool) -> None:
        """Start opening or closing. Repeating the current target is a no-op."""
        if is_open == self._is_open:
            return
        self._is_open = is_open
        self._transition_id += 1
        transition_id = self._transition_id
        self.cancel()

        if is_open:
            moving, settled = AnimationState.ENTERING, AnimationState.ENTERED
        else:
            moving, settled = AnimationState.EXITING, AnimationState.EXITED

        if not self.duration_ms:
            self._set_state(settled)
            return

        self._set_state(moving)
        try:
            self._timer = self.scheduler.call_later(
                self.duration_ms / 1000, lambda: self._finish(transition_id, settled)
            )
        except RuntimeError as e:
            logger.warning(f"Could not schedule animation timer, settling immediately: {e}")
            self._set_state(settled)

    def _finish(self, transition_id: int, settled: AnimationState) -> None:
        if transition_id != self._transition_id:
            return
        self._timer = None
        self._set_state(settled)
