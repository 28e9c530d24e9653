import threading
import time

import pytest

from tickmatch.ring_buffer import RingBufferEmpty, RingBufferFull, SpscRingBuffer


def test_push_pop_roundtrip():
    q = SpscRingBuffer(8)
    assert len(q) == 0
    q.push(10)
    q.push(11)
    assert q.pop() == 10
    assert q.pop() == 11
    with pytest.raises(RingBufferEmpty):
        q.pop()


def test_concurrent_spsc_flow():
    q = SpscRingBuffer(1024)
    n = 50_000
    received = []
    errors = []

    def producer():
        for i in range(n):
            while True:
                try:
                    q.push(i)
                    break
                except RingBufferFull:
                    time.sleep(0)

    def consumer():
        expected = 0
        while expected < n:
            try:
                v = q.pop()
            except RingBufferEmpty:
                time.sleep(0)
                continue
            if v != expected:
                errors.append((v, expected))
                return
            received.append(v)
            expected += 1

    tp = threading.Thread(target=producer)
    tc = threading.Thread(target=consumer)
    tp.start()
    tc.start()
    tp.join()
    tc.join()
    assert errors == []
    assert len(received) == n
    assert len(q) == 0


@pytest.mark.parametrize("capacity", [0, 1, 3, 6, 100])
def test_invalid_capacity_rejected(capacity):
    with pytest.raises(ValueError):
        SpscRingBuffer(capacity)


def test_capacity_reported():
    assert SpscRingBuffer(16).capacity() == 16


def test_full_buffer_rejects_and_returns_value():
    q = SpscRingBuffer(2)
    q.push("a")
    q.push("b")
    with pytest.raises(RingBufferFull) as info:
        q.push("c")
    assert info.value.value == "c"
    assert len(q) == 2
    assert q.pop() == "a"


def test_wraps_around_preserving_order():
    q = SpscRingBuffer(4)
    out = []
    for i in range(20):
        q.push(i)
        if i % 2:
            out.append(q.pop())
            out.append(q.pop())
    assert out == list(range(20))
    assert len(q) == 0


def test_drain_yields_fifo_and_empties():
    q = SpscRingBuffer(8)
    for i in range(5):
        q.push(i)
    assert list(q.drain()) == [0, 1, 2, 3, 4]
    assert len(q) == 0
    assert list(q.drain()) == []


def test_len_tracks_pushes_and_pops():
    q = SpscRingBuffer(8)
    for i in range(6):
        q.push(i)
        assert len(q) == i + 1
    q.pop()
    assert len(q) == 5