"""Per-client fixed-window request counter."""

import math
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from pawprice.core.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass
class RateLimitEntry:
    """Request count for one client within its current window."""

    count: int
    window_start: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of one rate limit check, rendered as response headers."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after: int

    def headers(self) -> dict[str, str]:
        """Headers sent with every response of a limited route."""
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimiter:
    """Counts requests per client id over a window of ``window_seconds``.

    The window for a client starts at its first request and is reset by the
    first request made after it has elapsed. The map of clients is bounded
    by ``max_clients``: once full, expired windows are swept and then the
    least recently seen client is evicted.

    All bookkeeping is synchronous so a check can never be split by an
    ``await``.
    """

    def __init__(
        self,
        window_seconds: float = 3600.0,
        max_requests: int = 60,
        max_clients: int = 10_000,
        clock: Clock = time.time,
    ) -> None:
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.max_clients = max_clients
        self._clock = clock
        self._entries: OrderedDict[str, RateLimitEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def hit(self, client_id: str) -> RateLimitDecision:
        """Record one request for ``client_id`` and decide whether it may pass."""
        if not isinstance(client_id, str) or not client_id:
            raise ValueError(f"Invalid client identifier: {client_id!r}")

        now = self._clock()
        entry = self._entries.get(client_id)
        if entry is None:
            self._make_room(now)
            entry = RateLimitEntry(count=0, window_start=now)
            self._entries[client_id] = entry
        else:
            self._entries.move_to_end(client_id)

        if now - entry.window_start >= self.window_seconds:
            entry.count = 0
            entry.window_start = now

        entry.count += 1

        window_end = entry.window_start + self.window_seconds
        allowed = entry.count <= self.max_requests
        return RateLimitDecision(
            allowed=allowed,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - entry.count),
            reset_at=math.ceil(window_end),
            retry_after=max(0, math.ceil(window_end - now)),
        )

    def check(self, client_id: str) -> RateLimitDecision | None:
        """Like :meth:`hit` but fails open.

        Returns None when the limiter itself faults, in which case the
        request proceeds without rate limit headers.
        """
        try:
            return self.hit(client_id)
        except Exception as e:
            logger.error("rate_limiter_error", client_id=repr(client_id), error=str(e))
            return None

    def sweep(self, now: float | None = None) -> int:
        """Drop clients whose window has elapsed. Returns how many were removed."""
        now = self._clock() if now is None else now
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.window_start >= self.window_seconds
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _make_room(self, now: float) -> None:
        if len(self._entries) < self.max_clients:
            return
        removed = self.sweep(now)
        while len(self._entries) >= self.max_clients:
            self._entries.popitem(last=False)
            removed += 1
        logger.debug("rate_limit_entries_evicted", removed=removed)
