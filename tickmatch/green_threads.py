"""Cooperatively scheduled async tasks on an event loop."""

from __future__ import annotations

import asyncio


async def run_async_workers(worker_count: int) -> list[int]:
    """Run ``worker_count`` tasks, task ``i`` yielding ``i + 1``; results in completion order."""

    async def worker(i: int) -> int:
        await asyncio.sleep(0.002)
        return i + 1

    tasks = [asyncio.create_task(worker(i)) for i in range(worker_count)]
    return [await finished for finished in asyncio.as_completed(tasks)]


async def bounded_concurrency_sum(tasks: int, max_in_flight: int) -> int:
    """Sum ``range(tasks)`` computed by tasks of which at most ``max_in_flight`` run at once."""
    if tasks > 0 and max_in_flight <= 0:
        raise ValueError("max_in_flight must be > 0")
    semaphore = asyncio.Semaphore(max(max_in_flight, 1))

    async def worker(i: int) -> int:
        async with semaphore:
            await asyncio.sleep(0.001)
            return i

    results = await asyncio.gather(*(worker(i) for i in range(tasks)))
    return sum(results)