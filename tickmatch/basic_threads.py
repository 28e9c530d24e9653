"""Spawning and joining OS threads."""

from __future__ import annotations

import threading
import time


def spawn_and_join_workers(n: int) -> list[int]:
    """Run ``n`` workers, each producing ``i * i``; results come back in completion order."""
    out: list[int] = []
    out_lock = threading.Lock()

    def worker(i: int) -> None:
        time.sleep(0.002)
        with out_lock:
            out.append(i * i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(n)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return out