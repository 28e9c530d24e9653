"""Heap-backed order book with strict price-time priority.

Bids are kept in a max-heap and asks in a min-heap of price levels; each
level holds its resting orders in a FIFO queue ordered by time priority.
Heap keys for emptied levels are discarded lazily when the best price is
asked for.
"""

from __future__ import annotations

import heapq
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Callable

from tickmatch.types import Side


@dataclass(frozen=True)
class RestingOrder:
    """Resting liquidity at one price level.

    ``quantity`` is the remaining quantity. A lower ``time_priority`` means an
    older order; ``0`` asks the book to assign one on insertion.
    """

    order_id: int
    price_ticks: int
    quantity: int
    time_priority: int = 0


@dataclass
class _SideBook:
    """One side of the book: a heap of level keys plus the level queues."""

    to_key: Callable[[int], int]
    heap: list[int] = field(default_factory=list)
    levels: dict[int, deque[RestingOrder]] = field(default_factory=dict)

    def best_price(self) -> int | None:
        while self.heap:
            price = self.to_key(self.heap[0])
            if self.levels.get(price):
                return price
            heapq.heappop(self.heap)
        return None

    def level(self, price: int) -> deque[RestingOrder]:
        queue = self.levels.get(price)
        if queue is None:
            heapq.heappush(self.heap, self.to_key(price))
            queue = self.levels[price] = deque()
        return queue

    def pop_best(self) -> tuple[int, RestingOrder] | None:
        price = self.best_price()
        if price is None:
            return None
        queue = self.levels[price]
        order = queue.popleft()
        if not queue:
            del self.levels[price]
        return price, order


def _negate(price: int) -> int:
    return -price


def _identity(price: int) -> int:
    return price


def _insert_by_time(queue: deque[RestingOrder], order: RestingOrder) -> None:
    """Insert keeping ascending ``time_priority``, after equal keys."""
    if not queue or queue[-1].time_priority <= order.time_priority:
        queue.append(order)
        return
    idx = next(
        (i for i, existing in enumerate(queue) if existing.time_priority > order.time_priority),
        len(queue),
    )
    queue.insert(idx, order)


class OrderBook:
    """Order book state for one instrument partition."""

    def __init__(self) -> None:
        self._bids = _SideBook(_negate)
        self._asks = _SideBook(_identity)
        self._order_index: dict[int, tuple[Side, int]] = {}
        self._next_time_priority = 0

    def _side(self, side: Side) -> _SideBook:
        return self._bids if side is Side.BUY else self._asks

    def _alloc_time_priority(self) -> int:
        value = self._next_time_priority
        self._next_time_priority += 1
        return value

    def best_bid(self) -> int | None:
        """Highest bid price with resting liquidity, or ``None``."""
        return self._bids.best_price()

    def best_ask(self) -> int | None:
        """Lowest ask price with resting liquidity, or ``None``."""
        return self._asks.best_price()

    def add_resting(self, side: Side, order: RestingOrder) -> None:
        """Add resting liquidity, stamping a time priority if none was given."""
        if order.time_priority == 0:
            order = replace(order, time_priority=self._alloc_time_priority())
        self._order_index[order.order_id] = (side, order.price_ticks)
        _insert_by_time(self._side(side).level(order.price_ticks), order)

    def pop_best_ask_order(self) -> tuple[int, RestingOrder] | None:
        """Remove and return ``(price, order)`` for the oldest order at the best ask."""
        popped = self._asks.pop_best()
        if popped is not None:
            self._order_index.pop(popped[1].order_id, None)
        return popped

    def pop_best_bid_order(self) -> tuple[int, RestingOrder] | None:
        """Remove and return ``(price, order)`` for the oldest order at the best bid."""
        popped = self._bids.pop_best()
        if popped is not None:
            self._order_index.pop(popped[1].order_id, None)
        return popped

    def requeue_front(self, side: Side, price: int, order: RestingOrder) -> None:
        """Put partially filled liquidity back, keeping its time priority."""
        self._order_index[order.order_id] = (side, price)
        _insert_by_time(self._side(side).level(price), order)

    def cancel_order(self, order_id: int) -> RestingOrder | None:
        """Remove a resting order by id; ``None`` if it is filled or absent."""
        located = self._order_index.pop(order_id, None)
        if located is None:
            return None
        side, price = located
        levels = self._side(side).levels
        queue = levels.get(price)
        if queue is None:
            return None
        removed = next((o for o in queue if o.order_id == order_id), None)
        if removed is not None:
            queue.remove(removed)
        if not queue:
            del levels[price]
        return removed