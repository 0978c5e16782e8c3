"""FIFO request queue that spaces out dispatches to one upstream source."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RequestQueue:
    """Serialize calls to an upstream, at most one dispatch per ``min_interval``.

    Callers are served in submission order; each receives its own result or
    exception. A failure does not stall the callers queued behind it.

    Example:
        ```python
        queue = RequestQueue(min_interval=0.2)
        response = await queue.submit(lambda: client.get(url))
        ```
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None
        self._pending = 0

    @property
    def min_interval(self) -> float:
        """Minimum spacing in seconds between two dispatches."""
        return self._min_interval

    @property
    def pending(self) -> int:
        """Number of callers waiting for or running their operation."""
        return self._pending

    async def submit(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Queue ``operation`` and wait for its outcome.

        Args:
            operation: Zero-argument callable returning the awaitable to run

        Returns:
            Whatever the operation returns
        """
        self._pending += 1
        try:
            # asyncio.Lock wakes waiters in FIFO order
            async with self._lock:
                if self._last_dispatch is not None:
                    wait = self._min_interval - (self._clock() - self._last_dispatch)
                    if wait > 0:
                        logger.debug("Throttling dispatch for %.3fs", wait)
                        await self._sleep(wait)
                self._last_dispatch = self._clock()
                return await operation()
        finally:
            self._pending -= 1
