"""Atomic coordination patterns: counters, publication, CAS loops, a spin lock
and a one-time initialisation state machine."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Generic, TypeVar

from tickmatch.atomics import AtomicInt

T = TypeVar("T")

_EMPTY = 0
_INITIALIZING = 1
_READY = 2


def relaxed_counter(threads: int, increments: int) -> int:
    """Increment a shared counter from ``threads`` workers; return the total."""
    counter = AtomicInt(0)

    def work() -> None:
        for _ in range(increments):
            counter.fetch_add(1)

    workers = [threading.Thread(target=work) for _ in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    return counter.load()


def release_acquire_publication(value: int) -> int:
    """Publish ``value`` from a writer thread and return what a reader observes."""
    data = AtomicInt(0)
    ready = threading.Event()

    def writer() -> None:
        data.store(value)
        ready.set()

    def reader() -> int:
        ready.wait()
        return data.load()

    with ThreadPoolExecutor(max_workers=2) as executor:
        reader_result = executor.submit(reader)
        executor.submit(writer).result()
        return reader_result.result()


def cas_increment(counter: AtomicInt) -> None:
    """Increment ``counter`` with a compare-and-swap retry loop."""
    while True:
        current = counter.load()
        if counter.compare_exchange(current, current + 1):
            return
        time.sleep(0)


class SpinLock(Generic[T]):
    """Busy-waiting lock guarding one value; not fair under contention."""

    def __init__(self, value: T) -> None:
        self._flag = AtomicInt(0)
        self._value = value

    def _acquire(self) -> None:
        while not self._flag.compare_exchange(0, 1):
            time.sleep(0)

    def _release(self) -> None:
        self._flag.store(0)

    def lock(self) -> "SpinLockGuard[T]":
        """Guard that acquires the lock on entry and releases it on exit."""
        return SpinLockGuard(self)


class SpinLockGuard(Generic[T]):
    """Context manager giving access to a ``SpinLock``'s value while held."""

    def __init__(self, lock: SpinLock[T]) -> None:
        self._lock = lock
        self._held = False

    def __enter__(self) -> "SpinLockGuard[T]":
        self._lock._acquire()
        self._held = True
        return self

    def __exit__(self, *args: object) -> None:
        self._held = False
        self._lock._release()

    def _check_held(self) -> None:
        if not self._held:
            raise RuntimeError("spin lock guard is not held")

    @property
    def value(self) -> T:
        self._check_held()
        return self._lock._value

    @value.setter
    def value(self, new: T) -> None:
        self._check_held()
        self._lock._value = new


class OnceValue(Generic[T]):
    """Value computed by the first caller of ``get_or_init`` and shared afterwards."""

    def __init__(self) -> None:
        self._state = AtomicInt(_EMPTY)
        self._value: T | None = None

    def get_or_init(self, init: Callable[[], T]) -> T:
        """Return the stored value, running ``init`` only if nobody has yet.

        If ``init`` raises, the value stays uninitialised and the error propagates.
        """
        while True:
            state = self._state.load()
            if state == _READY:
                return self._value  # type: ignore[return-value]
            if state == _EMPTY:
                if self._state.compare_exchange(_EMPTY, _INITIALIZING):
                    try:
                        value = init()
                    except BaseException:
                        self._state.store(_EMPTY)
                        raise
                    self._value = value
                    self._state.store(_READY)
                    return value
            else:
                time.sleep(10e-6)