import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from movieshelf.omdb.config import OMDB_MAX_CONCURRENCY
from movieshelf.omdb.logger import logger

T = TypeVar("T")


async def gather_limited(
    factories: Sequence[Callable[[], Awaitable[T | None]]],
    *,
    limit: int = OMDB_MAX_CONCURRENCY,
) -> list[T]:
    """
    Run every coroutine factory with at most `limit` in flight and wait for
    all of them. Results keep the input order; None results and failures are
    dropped, failures are logged. A cancelled task cancels the whole batch.
    """
    semaphore = asyncio.Semaphore(limit)

    async def _run(factory: Callable[[], Awaitable[T | None]]) -> T | None:
        async with semaphore:
            return await factory()

    results = await asyncio.gather(
        *(_run(factory) for factory in factories),
        return_exceptions=True,
    )

    collected: list[T] = []
    for result in results:
        if isinstance(result, Exception):
            logger.warning(f"Limited task failed: {result!r}")
            continue
        if isinstance(result, BaseException):
            # Cancellation is not a lookup failure.
            raise result
        if result is not None:
            collected.append(result)
    return collected


__all__ = ["gather_limited"]
