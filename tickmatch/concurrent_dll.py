"""A thread-safe doubly linked list.

Each node guards its links with a lock and its value with a readers-writer
lock; structural changes to the list are serialised by one list-level lock,
so no operation ever takes locks on two nodes in conflicting order.
"""

from __future__ import annotations

import threading
import weakref
from typing import Generic, Optional, TypeVar

from tickmatch.shared_state import RwLock

T = TypeVar("T")


class ConcurrentDllNode(Generic[T]):
    """List node holding a strong link forward and a weak link backward."""

    def __init__(self, value: T) -> None:
        self._value = value
        self._value_lock = RwLock()
        self._links = threading.Lock()
        self._next: Optional[ConcurrentDllNode[T]] = None
        self._prev: Optional[weakref.ref[ConcurrentDllNode[T]]] = None

    def read_value(self) -> T:
        """Current value, read under shared access."""
        with self._value_lock.read():
            return self._value

    def write_value(self, value: T) -> None:
        """Replace the value under exclusive access."""
        with self._value_lock.write():
            self._value = value

    def next(self) -> Optional[ConcurrentDllNode[T]]:
        """Following node, or ``None``."""
        with self._links:
            return self._next

    def prev(self) -> Optional[ConcurrentDllNode[T]]:
        """Preceding node if it is still alive, or ``None``."""
        with self._links:
            ref = self._prev
        return ref() if ref is not None else None

    def _set_next(self, node: Optional[ConcurrentDllNode[T]]) -> None:
        with self._links:
            self._next = node

    def _set_prev(self, node: Optional[ConcurrentDllNode[T]]) -> None:
        with self._links:
            self._prev = weakref.ref(node) if node is not None else None

    def _take_next(self) -> Optional[ConcurrentDllNode[T]]:
        with self._links:
            node, self._next = self._next, None
            return node

    def _take_prev(self) -> Optional[ConcurrentDllNode[T]]:
        with self._links:
            ref, self._prev = self._prev, None
        return ref() if ref is not None else None

    def __repr__(self) -> str:
        return f"ConcurrentDllNode({self.read_value()!r})"


class ConcurrentDll(Generic[T]):
    """Doubly linked list safe to push to and pop from across threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._head: Optional[ConcurrentDllNode[T]] = None
        self._tail: Optional[ConcurrentDllNode[T]] = None
        self._len = 0

    def __len__(self) -> int:
        with self._lock:
            return self._len

    def head(self) -> Optional[ConcurrentDllNode[T]]:
        """First node, or ``None`` when empty."""
        with self._lock:
            return self._head

    def tail(self) -> Optional[ConcurrentDllNode[T]]:
        """Last node, or ``None`` when empty."""
        with self._lock:
            return self._tail

    def push_front(self, value: T) -> ConcurrentDllNode[T]:
        """Insert ``value`` at the front and return its node."""
        node = ConcurrentDllNode(value)
        with self._lock:
            old_head = self._head
            if old_head is None:
                self._head = self._tail = node
            else:
                old_head._set_prev(node)
                node._set_next(old_head)
                self._head = node
            self._len += 1
        return node

    def push_back(self, value: T) -> ConcurrentDllNode[T]:
        """Insert ``value`` at the back and return its node."""
        node = ConcurrentDllNode(value)
        with self._lock:
            old_tail = self._tail
            if old_tail is None:
                self._head = self._tail = node
            else:
                old_tail._set_next(node)
                node._set_prev(old_tail)
                self._tail = node
            self._len += 1
        return node

    def pop_front(self) -> Optional[ConcurrentDllNode[T]]:
        """Detach and return the first node, or ``None`` when empty."""
        with self._lock:
            old_head = self._head
            if old_head is None:
                return None
            following = old_head._take_next()
            if following is None:
                self._head = self._tail = None
            else:
                following._set_prev(None)
                self._head = following
            old_head._set_prev(None)
            self._len -= 1
            return old_head

    def pop_back(self) -> Optional[ConcurrentDllNode[T]]:
        """Detach and return the last node, or ``None`` when empty."""
        with self._lock:
            old_tail = self._tail
            if old_tail is None:
                return None
            preceding = old_tail._take_prev()
            if preceding is None:
                self._head = self._tail = None
            else:
                preceding._set_next(None)
                self._tail = preceding
            old_tail._set_next(None)
            self._len -= 1
            return old_tail