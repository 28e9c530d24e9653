"""Thread lifecycle patterns: joining, cooperative shutdown, and a leaked thread."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor


def clean_join_example() -> int:
    """Run one worker and wait for its result."""
    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(lambda: 42).result()


def cooperative_shutdown(timeout_ms: int) -> int:
    """Run a worker until a stop signal after ``timeout_ms``; return its loop count."""
    stop = threading.Event()
    iterations = 0

    def worker() -> None:
        nonlocal iterations
        while not stop.is_set():
            iterations += 1
            time.sleep(0.001)

    thread = threading.Thread(target=worker, name="cooperative-worker")
    thread.start()

    deadline = time.monotonic() + timeout_ms / 1000
    while time.monotonic() < deadline:
        time.sleep(0.001)

    stop.set()
    thread.join()
    return iterations


def intentionally_forget_join_handle() -> None:
    """Start a short-lived worker and never join it: the caller gets no completion guarantee."""
    threading.Thread(
        target=time.sleep, args=(0.005,), name="forgotten-worker", daemon=True
    ).start()