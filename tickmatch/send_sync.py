"""Moving values into a thread and sharing read-only data across threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor


def move_vec_across_thread() -> int:
    """Hand a list to a worker thread and return the sum it computes."""
    payload = [10, 20, 30]
    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(sum, payload).result()


def share_arc_across_threads(workers: int) -> int:
    """Let ``workers`` threads each sum one shared tuple; return the grand total."""
    shared = (1, 2, 3, 4)
    if workers <= 0:
        return 0
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(sum, shared) for _ in range(workers)]
        return sum(f.result() for f in futures)