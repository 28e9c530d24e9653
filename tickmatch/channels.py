"""Message-passing patterns between threads: fan-in, bounded backpressure and
a multi-producer/multi-consumer worker pool."""

from __future__ import annotations

import queue
import threading
import time
from typing import Iterator, TypeVar

T = TypeVar("T")

_DONE = object()


def _drain(q: "queue.SimpleQueue[T]") -> Iterator[T]:
    """Yield everything currently queued; only safe once all producers are joined."""
    while True:
        try:
            yield q.get_nowait()
        except queue.Empty:
            return


def _start_all(threads: list[threading.Thread]) -> None:
    for thread in threads:
        thread.start()


def _join_all(threads: list[threading.Thread]) -> None:
    for thread in threads:
        thread.join()


def fan_in_sum(producers: int, values_per_producer: int) -> int:
    """Let several producers send into one queue and return the sum received.

    Producer ``p`` sends ``p * values_per_producer + i`` for each ``i``.
    """
    inbox: queue.SimpleQueue[int] = queue.SimpleQueue()

    def produce(p: int) -> None:
        for i in range(values_per_producer):
            inbox.put(p * values_per_producer + i)

    threads = [threading.Thread(target=produce, args=(p,)) for p in range(producers)]
    _start_all(threads)
    _join_all(threads)
    return sum(_drain(inbox))


def bounded_backpressure_demo(capacity: int, values: int) -> int:
    """Push ``values`` items through a bounded queue to a slow consumer.

    The producer blocks whenever the queue holds ``capacity`` items. A
    capacity below one is treated as one. Returns the number consumed.
    """
    channel: queue.Queue[int] = queue.Queue(maxsize=max(capacity, 1))
    consumed = 0

    def produce() -> None:
        for i in range(values):
            channel.put(i)

    def consume() -> None:
        nonlocal consumed
        for _ in range(values):
            channel.get()
            consumed += 1
            time.sleep(0.001)

    threads = [threading.Thread(target=produce), threading.Thread(target=consume)]
    _start_all(threads)
    _join_all(threads)
    return consumed


def mpmc_worker_pool_demo(workers: int, jobs: int) -> int:
    """Square ``range(jobs)`` on ``workers`` threads sharing one job queue.

    Returns the sum of the squares gathered from the result queue.
    """
    if workers <= 0 and jobs > 0:
        raise ValueError("at least one worker is needed to process jobs")

    bound = max(jobs, 1)
    job_queue: queue.Queue[object] = queue.Queue(maxsize=bound)
    result_queue: queue.Queue[int] = queue.Queue(maxsize=bound)

    def work() -> None:
        while True:
            job = job_queue.get()
            if job is _DONE:
                return
            result_queue.put(job * job)  # type: ignore[operator]

    threads = [threading.Thread(target=work) for _ in range(workers)]
    _start_all(threads)

    for j in range(jobs):
        job_queue.put(j)

    total = sum(result_queue.get() for _ in range(jobs))

    for _ in threads:
        job_queue.put(_DONE)
    _join_all(threads)
    return total