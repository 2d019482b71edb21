"""Bounded fan-out for coroutine tasks."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar("T")


async def run_with_concurrency(
    tasks: Sequence[Callable[[], Awaitable[T]]], limit: int
) -> List[T]:
    """Run ``tasks`` with at most ``limit`` in flight at once.

    Workers pull the next index from a shared cursor, so results land in the
    slot of the task that produced them regardless of completion order.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if not tasks:
        return []

    results: List[T] = [None] * len(tasks)  # type: ignore[list-item]
    cursor = 0

    async def worker() -> None:
        nonlocal cursor
        while cursor < len(tasks):
            index = cursor
            cursor += 1
            results[index] = await tasks[index]()

    await asyncio.gather(*(worker() for _ in range(min(limit, len(tasks)))))
    return results
