import asyncio
import math
import time
from collections.abc import Callable
from typing import NamedTuple, Protocol


class RateLimitDecision(NamedTuple):
    allowed: bool
    remaining: int
    retry_after_s: int = 0


class CounterStore(Protocol):
    async def increment(self, key: str, window_s: float, now: float) -> tuple[int, float]:
        """Count one hit for ``key`` and return the hit count and the end of its window."""
        ...


class InMemoryCounterStore:
    """Fixed window counters kept in the memory of a single app instance."""

    def __init__(self) -> None:
        self._counters: dict[str, tuple[int, float]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._counters)

    def _evict_expired(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._counters.items() if reset_at <= now]
        for key in expired:
            del self._counters[key]

    async def increment(self, key: str, window_s: float, now: float) -> tuple[int, float]:
        async with self._lock:
            self._evict_expired(now)
            count, reset_at = self._counters.get(key, (0, now + window_s))
            self._counters[key] = (count + 1, reset_at)
            return count + 1, reset_at


class RateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_s: float,
        store: CounterStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1 or window_s <= 0:
            raise ValueError("Rate limiter needs at least one request per positive window")

        self.max_requests = max_requests
        self.window_s = window_s
        self.store = store or InMemoryCounterStore()
        self._clock = clock

    async def hit(self, key: str) -> RateLimitDecision:
        now = self._clock()
        count, reset_at = await self.store.increment(key, self.window_s, now)
        if count > self.max_requests:
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                retry_after_s=max(1, math.ceil(reset_at - now)),
            )
        return RateLimitDecision(allowed=True, remaining=self.max_requests - count)
