import pytest

from squadboard.utils.rate_limit import InMemoryCounterStore, RateLimiter


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_rate_limiter_blocks_after_max_requests() -> None:
    limiter = RateLimiter(max_requests=3, window_s=600, clock=_FakeClock())

    decisions = [await limiter.hit("7:127.0.0.1") for _ in range(4)]

    assert [decision.allowed for decision in decisions] == [True, True, True, False]
    assert [decision.remaining for decision in decisions] == [2, 1, 0, 0]
    assert decisions[-1].retry_after_s == 600


@pytest.mark.asyncio
async def test_rate_limiter_keys_are_independent() -> None:
    limiter = RateLimiter(max_requests=1, window_s=600, clock=_FakeClock())

    assert (await limiter.hit("7:127.0.0.1")).allowed
    assert not (await limiter.hit("7:127.0.0.1")).allowed
    assert (await limiter.hit("8:127.0.0.1")).allowed


@pytest.mark.asyncio
async def test_rate_limiter_window_resets() -> None:
    clock = _FakeClock()
    limiter = RateLimiter(max_requests=1, window_s=600, clock=clock)

    assert (await limiter.hit("7:127.0.0.1")).allowed
    clock.now += 599
    blocked = await limiter.hit("7:127.0.0.1")
    assert not blocked.allowed
    assert blocked.retry_after_s == 1

    clock.now += 1
    assert (await limiter.hit("7:127.0.0.1")).allowed


@pytest.mark.asyncio
async def test_in_memory_store_evicts_expired_windows() -> None:
    store = InMemoryCounterStore()

    await store.increment("a", 10, now=0)
    await store.increment("b", 10, now=5)
    assert len(store) == 2

    await store.increment("c", 10, now=12)
    assert len(store) == 2


def test_rate_limiter_rejects_invalid_settings() -> None:
    with pytest.raises(ValueError):
        RateLimiter(max_requests=0, window_s=600)
