"""Command that runs every concurrency demo in order and prints its result."""

from __future__ import annotations

import argparse
import asyncio

from tickmatch.atomics import AtomicInt, atomic_counter, claim_once
from tickmatch.atomics_deep_dive import (
    OnceValue,
    cas_increment,
    relaxed_counter,
    release_acquire_publication,
)
from tickmatch.basic_threads import spawn_and_join_workers
from tickmatch.channels import bounded_backpressure_demo, fan_in_sum, mpmc_worker_pool_demo
from tickmatch.deadlock import concurrent_transfer_demo
from tickmatch.green_threads import bounded_concurrency_sum, run_async_workers
from tickmatch.send_sync import move_vec_across_thread, share_arc_across_threads
from tickmatch.shared_state import mutex_counter, rwlock_read_heavy_demo
from tickmatch.thread_lifecycle import (
    clean_join_example,
    cooperative_shutdown,
    intentionally_forget_join_handle,
)
from tickmatch.thread_pool import thread_pool_sum_of_squares


def _flag(value: bool) -> str:
    return "true" if value else "false"


async def _async_section() -> None:
    print("\n== green_threads_async ==")
    workers = sorted(await run_async_workers(8))
    print(f"async worker outputs: {workers}")
    print(f"bounded concurrency sum (0..20): {await bounded_concurrency_sum(20, 4)}")


def main(argv: list[str] | None = None) -> int:
    """Run all demos from basic to advanced."""
    parser = argparse.ArgumentParser(description="Run every concurrency demo.")
    parser.parse_args(argv)

    print("== basic_threads ==")
    print(f"squares: {spawn_and_join_workers(6)}")

    print("\n== shared_state ==")
    print(f"mutex counter: {mutex_counter(4, 1_000)}")
    print(f"rwlock read-heavy total: {rwlock_read_heavy_demo(4)}")

    print("\n== send_sync ==")
    print(f"move vec across thread sum: {move_vec_across_thread()}")
    print(f"share Arc across threads total: {share_arc_across_threads(3)}")

    print("\n== atomics ==")
    print(f"atomic counter: {atomic_counter(4, 1_000)}")
    once_flag = AtomicInt(0)
    print(f"claim_once #1: {_flag(claim_once(once_flag))}")
    print(f"claim_once #2: {_flag(claim_once(once_flag))}")

    print("\n== atomics_deep_dive ==")
    print(f"relaxed_counter: {relaxed_counter(4, 1_000)}")
    print(f"release_acquire_publication(123): {release_acquire_publication(123)}")
    cas_counter = AtomicInt(0)
    for _ in range(10):
        cas_increment(cas_counter)
    print(f"cas_increment after 10 calls: {cas_counter.load()}")
    once = OnceValue()
    print(f"once get_or_init first: {once.get_or_init(lambda: 555)}")
    print(f"once get_or_init second: {once.get_or_init(lambda: 999)}")

    print("\n== thread_lifecycle ==")
    print(f"clean join result: {clean_join_example()}")
    print(f"cooperative shutdown loops observed: {cooperative_shutdown(8)}")
    intentionally_forget_join_handle()
    print("intentionally forgot one handle (demo-only)")

    asyncio.run(_async_section())

    print("\n== channels_patterns ==")
    print(f"fan-in sum (3x4): {fan_in_sum(3, 4)}")
    print(f"bounded backpressure consumed: {bounded_backpressure_demo(2, 20)}")
    print(f"mpmc square-sum (jobs=10): {mpmc_worker_pool_demo(3, 10)}")

    print("\n== deadlock_patterns ==")
    print(
        "concurrent transfer total balance (should remain 2000): "
        f"{concurrent_transfer_demo()}"
    )

    print("\n== thread_pool ==")
    print(f"thread-pool sum of squares (0..10): {thread_pool_sum_of_squares(4, 10)}")
    return 0