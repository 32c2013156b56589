import asyncio

import pytest

from movieshelf.omdb.limiter import gather_limited


def test_gather_limited_caps_in_flight_tasks() -> None:
    in_flight = 0
    max_in_flight = 0

    async def resolve(n: int) -> int:
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return n

    factories = [lambda n=n: resolve(n) for n in range(12)]
    results = asyncio.run(gather_limited(factories, limit=5))

    assert max_in_flight == 5
    assert results == list(range(12))


def test_gather_limited_keeps_input_order() -> None:
    async def resolve(n: int) -> int:
        # Later inputs finish first.
        await asyncio.sleep(0.001 * (10 - n))
        return n

    factories = [lambda n=n: resolve(n) for n in range(10)]
    results = asyncio.run(gather_limited(factories, limit=5))

    assert results == list(range(10))


def test_gather_limited_drops_missing_and_failed_results() -> None:
    async def resolve(n: int) -> int | None:
        await asyncio.sleep(0)
        if n % 4 == 0:
            raise RuntimeError(f"lookup {n} failed")
        if n % 3 == 0:
            return None
        return n

    factories = [lambda n=n: resolve(n) for n in range(12)]
    results = asyncio.run(gather_limited(factories, limit=5))

    # 0, 4, 8 fail; 3, 6, 9 are not found.
    assert results == [1, 2, 5, 7, 10, 11]


def test_gather_limited_runs_every_task_despite_failures() -> None:
    finished: list[int] = []

    async def resolve(n: int) -> int:
        if n == 0:
            raise RuntimeError("first task fails immediately")
        await asyncio.sleep(0.01)
        finished.append(n)
        return n

    factories = [lambda n=n: resolve(n) for n in range(6)]
    results = asyncio.run(gather_limited(factories, limit=2))

    assert results == [1, 2, 3, 4, 5]
    assert sorted(finished) == [1, 2, 3, 4, 5]


def test_gather_limited_empty() -> None:
    assert asyncio.run(gather_limited([], limit=5)) == []


def test_gather_limited_propagates_cancellation() -> None:
    async def resolve(n: int) -> int:
        await asyncio.sleep(0)
        if n == 2:
            raise asyncio.CancelledError()
        return n

    factories = [lambda n=n: resolve(n) for n in range(4)]

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(gather_limited(factories, limit=2))
