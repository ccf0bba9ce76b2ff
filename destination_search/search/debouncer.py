"""
Debounced search invocation.

Delays the search pipeline until typing pauses so that a burst of
keystrokes costs one dataset scan instead of one per key.
"""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Set

from ..config import settings
from .normalizer import normalize

logger = logging.getLogger(__name__)


class DebounceState(str, Enum):
    """Debouncer states."""

    IDLE = "idle"
    PENDING = "pending"


class SearchDebouncer:
    """
    Collapse rapid input events into a single search invocation.

    Every event cancels the pending timer and starts a new one; only the
    timer that survives the full delay fires. Inputs shorter than the
    minimum length never schedule anything and clear the view at once.

    A fired invocation runs as its own task and is never cancelled by later
    input. Discarding stale results is the caller's job.
    """

    def __init__(
        self,
        on_search: Callable[[str], Awaitable[None]],
        on_clear: Callable[[], None],
        delay: Optional[float] = None,
        min_length: Optional[int] = None,
    ):
        """
        Initialize debouncer.

        Args:
            on_search: Coroutine function run with the surviving raw input
            on_clear: Called synchronously for inputs below the minimum length
            delay: Debounce delay in seconds (defaults to settings)
            min_length: Minimum normalized length (defaults to settings)
        """
        self.on_search = on_search
        self.on_clear = on_clear
        self.delay = settings.DEBOUNCE_SECONDS if delay is None else delay
        self.min_length = settings.MIN_QUERY_LENGTH if min_length is None else min_length
        self.invocations = 0

        self._pending: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def state(self) -> DebounceState:
        if self._pending is not None and not self._pending.done():
            return DebounceState.PENDING
        return DebounceState.IDLE

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def submit(self, raw: str) -> None:
        """
        Handle one input event.

        Must be called from a running event loop.

        Args:
            raw: Current raw value of the input
        """
        self.cancel()

        if len(normalize(raw)) < self.min_length:
            self.on_clear()
            return

        self._pending = asyncio.create_task(self._fire_after_delay(raw))

    def cancel(self) -> bool:
        """
        Drop the pending invocation, if any.

        Returns:
            True if a pending invocation was cancelled
        """
        if self._pending is None or self._pending.done():
            self._pending = None
            return False

        self._pending.cancel()
        self._pending = None
        return True

    async def _fire_after_delay(self, raw: str) -> None:
        await asyncio.sleep(self.delay)

        self._pending = None
        self.invocations += 1
        logger.debug(f"Debounce elapsed, invoking search #{self.invocations}")

        task = asyncio.create_task(self.on_search(raw))
        self._inflight.add(task)
        task.add_done_callback(self._finish)

    def _finish(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Search invocation failed", exc_info=task.exception())

    async def drain(self) -> None:
        """Wait until no invocation is pending or running."""
        while True:
            waiting = list(self._inflight)
            if self.state is DebounceState.PENDING:
                waiting.append(self._pending)
            if not waiting:
                return
            await asyncio.gather(*waiting, return_exceptions=True)
