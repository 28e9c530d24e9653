"""Shared-state concurrency: a mutex-protected counter and a readers-writer lock."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class RwLock:
    """Many concurrent readers or one writer; waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold shared read access for the duration of the block."""
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold exclusive write access for the duration of the block."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def mutex_counter(thread_count: int, increments_per_thread: int) -> int:
    """Increment a lock-protected counter from many threads and return the total."""
    lock = threading.Lock()
    counter = 0

    def work() -> None:
        nonlocal counter
        for _ in range(increments_per_thread):
            with lock:
                counter += 1

    threads = [threading.Thread(target=work) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    with lock:
        return counter


def rwlock_read_heavy_demo(readers: int) -> int:
    """Write once, then let ``readers`` threads each sum the data; return the total."""
    rw = RwLock()
    data = [1, 2, 3, 4, 5]
    with rw.write():
        data.append(6)

    totals: list[int] = []
    totals_lock = threading.Lock()

    def reader() -> None:
        with rw.read():
            subtotal = sum(data)
        with totals_lock:
            totals.append(subtotal)

    threads = [threading.Thread(target=reader) for _ in range(readers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sum(totals)