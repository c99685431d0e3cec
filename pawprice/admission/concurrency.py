"""Bounded concurrency for model calls with FIFO hand-off."""

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pawprice.core.logging import get_logger
from pawprice.exceptions import SlotTimeoutError

logger = get_logger(__name__)


class ConcurrencyLimiter:
    """Hands out at most ``max_concurrent`` slots at a time.

    Waiters are served strictly in arrival order. A released slot goes
    straight to the head of the queue, so the held count never dips while
    someone is waiting. Only safe to use from a single event loop.
    """

    def __init__(self, max_concurrent: int = 5) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self._held = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    @property
    def held(self) -> int:
        return self._held

    @property
    def queued(self) -> int:
        return sum(1 for waiter in self._waiters if not waiter.done())

    async def acquire(self, timeout: float | None = None) -> None:
        """Wait for a slot.

        Args:
            timeout: Seconds to wait in the queue; None waits forever

        Raises:
            SlotTimeoutError: If no slot was granted within ``timeout``
        """
        if self._held < self.max_concurrent and not self._waiters:
            self._held += 1
            return

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        logger.debug("llm_slot_queued", held=self._held, queued=self.queued)
        try:
            await asyncio.wait_for(waiter, timeout)
        except asyncio.TimeoutError:
            self._forget(waiter)
            raise SlotTimeoutError(
                f"No model slot available within {timeout}s"
            ) from None
        except asyncio.CancelledError:
            self._forget(waiter)
            raise

    def release(self) -> None:
        """Return a slot, handing it to the oldest live waiter if any."""
        if self._held <= 0:
            raise RuntimeError("release() called without a held slot")
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                return
        self._held -= 1

    @asynccontextmanager
    async def slot(self, timeout: float | None = None) -> AsyncIterator[None]:
        """Hold a slot for the duration of the block."""
        await self.acquire(timeout)
        try:
            yield
        finally:
            self.release()

    def _forget(self, waiter: "asyncio.Future[None]") -> None:
        if waiter.done() and not waiter.cancelled():
            # The slot was handed over just as we gave up on it
            self.release()
            return
        try:
            self._waiters.remove(waiter)
        except ValueError:
            pass
