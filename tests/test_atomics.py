import threading

from tickmatch.atomics import AtomicInt, atomic_counter, claim_once


def test_atomic_counter_matches_expected():
    assert atomic_counter(4, 1000) == 4000


def test_only_one_thread_can_claim_once():
    flag = AtomicInt(0)
    results = []
    results_lock = threading.Lock()

    def attempt():
        won = claim_once(flag)
        with results_lock:
            results.append(won)

    threads = [threading.Thread(target=attempt) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 16
    assert sum(results) == 1
    assert flag.load() == 1
    assert claim_once(flag) is False


def test_claim_once_sequential_calls():
    flag = AtomicInt(0)
    assert claim_once(flag) is True
    assert claim_once(flag) is False
    assert flag.load() == 1


def test_fetch_add_returns_previous_value():
    cell = AtomicInt(5)
    assert cell.fetch_add(3) == 5
    assert cell.load() == 8


def test_compare_exchange_failure_leaves_value():
    cell = AtomicInt(2)
    assert cell.compare_exchange(1, 9) is False
    assert cell.load() == 2
    assert cell.compare_exchange(2, 9) is True
    assert cell.load() == 9


def test_store_replaces_value():
    cell = AtomicInt()
    cell.store(11)
    assert cell.load() == 11