"""Matching engine state and thread-safe orchestration.

``MatchingEngine`` is single-writer: it deduplicates commands by
idempotency key, advances one event sequence, and routes ``NewOrder``,
``CancelOrder`` and ``ReplaceOrder`` commands. ``ConcurrentMatchingEngine``
wraps one engine behind a lock for shared use across threads.
"""

from __future__ import annotations

import logging
import threading

from tickmatch.command import CancelOrder, EngineCommand, NewOrder, OrderCommand, ReplaceOrder
from tickmatch.event import ExecutionEvent, ExecutionEventKind
from tickmatch.matcher import match_command
from tickmatch.orderbook import OrderBook
from tickmatch.ring_buffer import SpscRingBuffer

logger = logging.getLogger(__name__)


class MatchingEngine:
    """Single-partition matching engine with idempotent command handling."""

    def __init__(self) -> None:
        self.book = OrderBook()
        self._seen: set[int] = set()
        self._next_seq = 1

    def _emit_event(
        self, order_id: int, kind: ExecutionEventKind, price_ticks: int, quantity: int
    ) -> ExecutionEvent:
        seq = self._next_seq
        self._next_seq += 1
        return ExecutionEvent(
            seq=seq, order_id=order_id, kind=kind, price_ticks=price_ticks, quantity=quantity
        )

    def _process_new(self, cmd: OrderCommand) -> list[ExecutionEvent]:
        self._next_seq, events = match_command(self._next_seq, self.book, cmd)
        return events

    def _cancel(self, order_id: int) -> ExecutionEvent:
        removed = self.book.cancel_order(order_id)
        if removed is None:
            logger.debug("cancel target %s not found; emitting rejected event", order_id)
            return self._emit_event(order_id, ExecutionEventKind.REJECTED, 0, 0)
        return self._emit_event(
            removed.order_id, ExecutionEventKind.CANCELED, removed.price_ticks, removed.quantity
        )

    def process(self, cmd: EngineCommand) -> list[ExecutionEvent]:
        """Process one engine command and return the events it emitted.

        A command whose idempotency key was already seen emits nothing.
        """
        key = cmd.idempotency_key
        if key in self._seen:
            logger.debug("duplicate command ignored: idempotency_key=%s", key)
            return []

        if isinstance(cmd, NewOrder):
            self._seen.add(key)
            events = self._process_new(cmd.order)
        elif isinstance(cmd, CancelOrder):
            self._seen.add(key)
            events = [self._cancel(cmd.order_id)]
        elif isinstance(cmd, ReplaceOrder):
            self._seen.add(key)
            events = [self._cancel(cmd.cancel_order_id)]
            events.extend(self._process_new(cmd.new_order))
        else:
            raise TypeError(f"unsupported engine command: {cmd!r}")

        logger.debug("engine process end: emitted=%d next_seq=%d", len(events), self._next_seq)
        return events

    def on_command(self, cmd: OrderCommand) -> list[ExecutionEvent]:
        """Process one new-order command."""
        return self.process(NewOrder(cmd))

    def drain_ingress(self, ingress: SpscRingBuffer[OrderCommand]) -> list[ExecutionEvent]:
        """Match every order command currently in ``ingress``, in order."""
        out: list[ExecutionEvent] = []
        for cmd in ingress.drain():
            out.extend(self.on_command(cmd))
        return out

    def drain_command_ingress(
        self, ingress: SpscRingBuffer[EngineCommand]
    ) -> list[ExecutionEvent]:
        """Process every engine command currently in ``ingress``, in order."""
        out: list[ExecutionEvent] = []
        for cmd in ingress.drain():
            out.extend(self.process(cmd))
        return out


class ConcurrentMatchingEngine:
    """Thread-safe wrapper serialising all access to one ``MatchingEngine``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inner = MatchingEngine()

    def process(self, cmd: EngineCommand) -> list[ExecutionEvent]:
        """Process an engine command under mutual exclusion."""
        with self._lock:
            return self._inner.process(cmd)

    def on_command(self, cmd: OrderCommand) -> list[ExecutionEvent]:
        """Process a new-order command under mutual exclusion."""
        with self._lock:
            return self._inner.on_command(cmd)

    def drain_ingress(self, ingress: SpscRingBuffer[OrderCommand]) -> list[ExecutionEvent]:
        """Drain an order-command ring under mutual exclusion."""
        with self._lock:
            return self._inner.drain_ingress(ingress)

    def drain_command_ingress(
        self, ingress: SpscRingBuffer[EngineCommand]
    ) -> list[ExecutionEvent]:
        """Drain an engine-command ring under mutual exclusion."""
        with self._lock:
            return self._inner.drain_command_ingress(ingress)