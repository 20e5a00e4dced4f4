"""Bounded, fail-fast fan-out for comparator calls."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")


async def bounded_gather(
    calls: Iterable[Callable[[], Awaitable[T]]],
    limit: int,
) -> list[T]:
    """
    Run zero-argument async callables with at most ``limit`` in flight.

    Results come back in input order. The first failure cancels every call
    still running or waiting for a slot, and is then re-raised unchanged;
    calls that never got a slot are never started.

    Args:
        calls: Factories producing the awaitables (e.g. functools.partial)
        limit: Max concurrent calls

    Returns:
        Results in the order of ``calls``
    """
    semaphore = asyncio.Semaphore(limit)

    async def run(call: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await call()

    tasks = [asyncio.ensure_future(run(call)) for call in calls]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = ["bounded_gather"]
