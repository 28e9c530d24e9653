"""Command that walks through the atomics examples and prints their results."""

from __future__ import annotations

import argparse
import threading

from tickmatch.atomics import AtomicInt, atomic_counter
from tickmatch.atomics_deep_dive import (
    OnceValue,
    SpinLock,
    cas_increment,
    relaxed_counter,
    release_acquire_publication,
)


def _run_threads(target, count: int) -> None:
    threads = [threading.Thread(target=target) for _ in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def main(argv: list[str] | None = None) -> int:
    """Run every atomics demo and print its result."""
    parser = argparse.ArgumentParser(description="Run the atomics examples.")
    parser.parse_args(argv)

    print("== atomics basics ==")
    print(f"atomic_counter(4,1000): {atomic_counter(4, 1_000)}")
    print(f"relaxed_counter(4,1000): {relaxed_counter(4, 1_000)}")
    print(f"release_acquire_publication(42): {release_acquire_publication(42)}")

    print("\n== CAS loop increment ==")
    counter = AtomicInt(0)

    def cas_work() -> None:
        for _ in range(1_000):
            cas_increment(counter)

    _run_threads(cas_work, 4)
    print(f"cas counter after 4000 increments: {counter.load()}")

    print("\n== spin lock demo ==")
    lock = SpinLock(0)

    def spin_work() -> None:
        for _ in range(500):
            with lock.lock() as guard:
                guard.value += 1

    _run_threads(spin_work, 4)
    with lock.lock() as guard:
        print(f"spin lock protected value: {guard.value}")

    print("\n== once init demo ==")
    once = OnceValue()
    results: list[int] = []
    results_lock = threading.Lock()

    def once_work() -> None:
        value = once.get_or_init(lambda: 777)
        with results_lock:
            results.append(value)

    _run_threads(once_work, 8)
    print(f"once values: {results}")
    return 0