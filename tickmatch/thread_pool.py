"""Minimal fixed-size thread pool with graceful shutdown."""

from __future__ import annotations

import queue
import threading
from typing import Callable

_SHUTDOWN = object()


class ThreadPool:
    """Fixed set of worker threads executing submitted callables in FIFO order.

    A job that raises stops its worker; ``shutdown`` then re-raises as
    ``RuntimeError`` after all workers have been joined.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("thread pool size must be > 0")
        self._jobs: queue.SimpleQueue = queue.SimpleQueue()
        self._closed = False
        self._failure: BaseException | None = None
        self._failure_lock = threading.Lock()
        self._workers = [
            threading.Thread(target=self._worker_loop, name=f"pool-worker-{i}")
            for i in range(size)
        ]
        for worker in self._workers:
            worker.start()

    def _worker_loop(self) -> None:
        while True:
            job = self._jobs.get()
            if job is _SHUTDOWN:
                return
            try:
                job()
            except Exception as exc:
                with self._failure_lock:
                    if self._failure is None:
                        self._failure = exc
                return

    def execute(self, f: Callable[[], object]) -> None:
        """Submit one job; raises ``RuntimeError`` once the pool is shut down."""
        if self._closed:
            raise RuntimeError("pool already shut down")
        self._jobs.put(f)

    def shutdown(self) -> None:
        """Stop accepting jobs, let queued ones finish, and join every worker."""
        if self._closed:
            return
        self._closed = True
        for _ in self._workers:
            self._jobs.put(_SHUTDOWN)
        for worker in self._workers:
            worker.join()
        if self._failure is not None:
            raise RuntimeError("worker panicked") from self._failure

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()


def thread_pool_sum_of_squares(workers: int, n: int) -> int:
    """Sum ``i * i`` for ``i`` in ``range(n)`` computed on a pool of ``workers``."""
    results: queue.SimpleQueue[int] = queue.SimpleQueue()
    with ThreadPool(workers) as pool:
        for i in range(n):
            pool.execute(lambda i=i: results.put(i * i))
    total = 0
    while not results.empty():
        total += results.get()
    return total