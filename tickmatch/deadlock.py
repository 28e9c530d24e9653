"""Deadlock avoidance by acquiring multiple locks in one global order."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class Account:
    """Account balance guarded by its own lock."""

    id: int
    balance: int
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


def transfer_with_lock_ordering(a: Account, b: Account, amount: int) -> bool:
    """Move ``amount`` from ``a`` to ``b``, locking accounts by ascending id.

    Returns ``False`` without changing anything if ``a`` has too little.
    """
    if a is b:
        raise ValueError("cannot transfer between an account and itself")
    first, second = (a, b) if a.id <= b.id else (b, a)
    with first.lock, second.lock:
        if a.balance < amount:
            return False
        a.balance -= amount
        b.balance += amount
    return True


def concurrent_transfer_demo() -> int:
    """Run many opposing transfers concurrently and return the final total balance."""
    a = Account(id=1, balance=1_000)
    b = Account(id=2, balance=1_000)

    threads: list[threading.Thread] = []
    for _ in range(100):
        threads.append(threading.Thread(target=transfer_with_lock_ordering, args=(a, b, 1)))
        threads.append(threading.Thread(target=transfer_with_lock_ordering, args=(b, a, 1)))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with a.lock:
        a_final = a.balance
    with b.lock:
        b_final = b.balance
    return a_final + b_final