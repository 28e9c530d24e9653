"""Atomic integer cells and lock-free style coordination basics."""

from __future__ import annotations

import threading


class AtomicInt:
    """Integer cell whose every read-modify-write happens as one indivisible step."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def load(self) -> int:
        """Current value."""
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        """Replace the value."""
        with self._lock:
            self._value = value

    def fetch_add(self, delta: int) -> int:
        """Add ``delta`` and return the value held before the addition."""
        with self._lock:
            previous = self._value
            self._value = previous + delta
            return previous

    def compare_exchange(self, expected: int, new: int) -> bool:
        """Set ``new`` only if the value equals ``expected``; report whether it did."""
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True

    def __repr__(self) -> str:
        return f"AtomicInt({self.load()})"


def atomic_counter(thread_count: int, increments_per_thread: int) -> int:
    """Increment one shared atomic counter from many threads and return the total."""
    counter = AtomicInt(0)

    def work() -> None:
        for _ in range(increments_per_thread):
            counter.fetch_add(1)

    threads = [threading.Thread(target=work) for _ in range(thread_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return counter.load()


def claim_once(flag: AtomicInt) -> bool:
    """Flip ``flag`` from 0 to 1; only the first caller gets ``True``."""
    return flag.compare_exchange(0, 1)