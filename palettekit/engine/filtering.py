"""
Filter orchestration with stale-result protection.

Every call to ``FilterEngine.filter`` opens a new generation. Asynchronous
results are tagged with the generation that requested them and are dropped
when they land after a newer request, so the visible result set always
belongs to the latest ``(items, query)`` pair.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from ..models import Command, FilterResult
from .scoring import default_filter

logger = logging.getLogger(__name__)

FilterOutcome = Union[Sequence[Command], Awaitable[Sequence[Command]]]
FilterFn = Callable[[Sequence[Command], str], FilterOutcome]


@dataclass(frozen=True)
class CancellationToken:
    """Tied to one generation; cancelled as soon as a newer one starts."""

    generation: int
    _current_generation: Callable[[], int]

    @property
    def is_cancelled(self) -> bool:
        return self._current_generation() != self.generation


@dataclass(frozen=True)
class FilterRequest:
    """A single filter invocation."""

    generation: int
    items: tuple[Command, ...]
    query: str
    token: CancellationToken


class FilterEngine:
    """
    Applies a sync or async filter function and tracks loading state.

    While an asynchronous result is pending the previous result stays
    visible; before anything has settled the unfiltered items are shown as a
    placeholder. Failures are logged and leave the last good result in place.
    """

    def __init__(
        self,
        filter_fn: Optional[FilterFn] = None,
        on_change: Optional[Callable[[FilterResult], None]] = None,
    ):
        self.filter_fn = filter_fn
        self.on_change = on_change
        self._generation = 0
        self._commands: list[Command] = []
        self._has_settled = False
        self._is_loading = False
        self._pending: Optional[FilterRequest] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def result(self) -> FilterResult:
        return FilterResult(commands=list(self._commands), is_loading=self._is_loading)

    @property
    def commands(self) -> list[Command]:
        return self._commands

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending_request(self) -> Optional[FilterRequest]:
        """The in-flight asynchronous request, if the latest one is async."""
        return self._pending

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.result)

    def _new_request(self, items: Sequence[Command], query: str) -> FilterRequest:
        self._generation += 1
        generation = self._generation
        return FilterRequest(
            generation=generation,
            items=tuple(items),
            query=query,
            token=CancellationToken(generation, lambda: self._generation),
        )

    def filter(
        self,
        items: Sequence[Command],
        query: str,
        filter_fn: Optional[FilterFn] = None,
    ) -> FilterResult:
        """
        Filter ``items`` by ``query``.

        Returns the visible result immediately. For async filter functions
        the settled result arrives later through ``on_change``.
        """
        request = self._new_request(items, query)
        self._pending = None
        fn = filter_fn or self.filter_fn or default_filter

        try:
            outcome = fn(items, query)
        except Exception as e:
            logger.warning(f"Filter function failed for query {query!r}: {e}")
            self._is_loading = False
            self._notify()
            return self.result

        if not inspect.isawaitable(outcome):
            try:
                commands = list(outcome)
            except TypeError as e:
                logger.warning(f"Filter function returned a non-list for query {query!r}: {e}")
                self._is_loading = False
                self._notify()
                return self.result
            self._settle(commands)
            return self.result

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Async filter requested without a running event loop; ignoring")
            if inspect.iscoroutine(outcome):
                outcome.close()
            self._is_loading = False
            self._notify()
            return self.result

        if not self._has_settled:
            self._commands = list(items)
        self._is_loading = True
        self._pending = request

        task = loop.create_task(self._await_result(request, outcome))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        self._notify()
        return self.result

    async def _await_result(
        self, request: FilterRequest, awaitable: Awaitable[Sequence[Command]]
    ) -> None:
        try:
            resolved = list(await awaitable)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if request.token.is_cancelled:
                logger.debug(f"Ignoring failure of superseded filter (generation {request.generation})")
                return
            logger.warning(f"Async filter failed for query {request.query!r}: {e}")
            self._pending = None
            self._is_loading = False
            self._notify()
            return

        if request.token.is_cancelled:
            logger.debug(
                f"Discarding stale filter result (generation {request.generation}, "
                f"current {self._generation})"
            )
            return

        self._settle(resolved)

    def _settle(self, commands: list[Command]) -> None:
        self._commands = commands
        self._has_settled = True
        self._is_loading = False
        self._pending = None
        self._notify()

    async def wait_settled(self) -> None:
        """Wait until every in-flight asynchronous filter has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
