"""Bounded single-producer/single-consumer ring buffer.

The capacity is a power of two so a slot index is ``cursor & mask``.
Exactly one thread may push and exactly one thread may pop; each side
only advances its own cursor after touching the slot, so the other side
never sees a half-written or still-needed slot.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class RingBufferFull(Exception):
    """Raised by ``push`` when the buffer is full; carries the rejected value."""

    def __init__(self, value: object) -> None:
        super().__init__("ring buffer is full")
        self.value = value


class RingBufferEmpty(Exception):
    """Raised by ``pop`` when there is nothing to dequeue."""

    def __init__(self) -> None:
        super().__init__("ring buffer is empty")


class SpscRingBuffer(Generic[T]):
    """Fixed-capacity FIFO queue for one producer and one consumer."""

    def __init__(self, capacity: int) -> None:
        if capacity < 2:
            raise ValueError("capacity must be at least 2")
        if capacity & (capacity - 1):
            raise ValueError("capacity must be power of two")
        self._mask = capacity - 1
        self._head = 0  # next readable cursor, owned by the consumer
        self._tail = 0  # next writable cursor, owned by the producer
        self._slots: list[T | None] = [None] * capacity

    def __len__(self) -> int:
        return self._tail - self._head

    def capacity(self) -> int:
        """Total number of slots."""
        return self._mask + 1

    def push(self, value: T) -> None:
        """Enqueue one item, raising ``RingBufferFull`` if there is no room."""
        tail = self._tail
        if tail - self._head == self.capacity():
            raise RingBufferFull(value)
        self._slots[tail & self._mask] = value
        self._tail = tail + 1

    def pop(self) -> T:
        """Dequeue the oldest item, raising ``RingBufferEmpty`` if none."""
        head = self._head
        if head == self._tail:
            raise RingBufferEmpty()
        idx = head & self._mask
        value = self._slots[idx]
        self._slots[idx] = None
        self._head = head + 1
        return value  # type: ignore[return-value]

    def drain(self) -> Iterator[T]:
        """Yield items in FIFO order until the buffer is observed empty."""
        while True:
            try:
                yield self.pop()
            except RingBufferEmpty:
                return