"""Matching logic enforcing price-time priority.

Price priority comes from the order book's heaps and time priority from its
per-level FIFO queues. Matching is a pure state transition on the book that
emits immutable events and returns the next sequence cursor.
"""

from __future__ import annotations

from dataclasses import replace

from tickmatch.command import OrderCommand
from tickmatch.event import ExecutionEvent, ExecutionEventKind
from tickmatch.orderbook import OrderBook, RestingOrder
from tickmatch.types import Side


def _crosses(book: OrderBook, cmd: OrderCommand) -> bool:
    if cmd.side is Side.BUY:
        best_ask = book.best_ask()
        return best_ask is not None and best_ask <= cmd.price_ticks
    best_bid = book.best_bid()
    return best_bid is not None and best_bid >= cmd.price_ticks


def match_command(
    seq_start: int, book: OrderBook, cmd: OrderCommand
) -> tuple[int, list[ExecutionEvent]]:
    """Match one command against ``book``.

    Returns the next sequence number and the events emitted, starting at
    ``seq_start``: an ``ACCEPTED`` event, one ``TRADE`` per fill, and a
    ``RESTED`` event if any quantity is left over.
    """
    seq = seq_start
    remaining = cmd.quantity
    events = [
        ExecutionEvent(
            seq=seq,
            order_id=cmd.order_id,
            kind=ExecutionEventKind.ACCEPTED,
            price_ticks=cmd.price_ticks,
            quantity=cmd.quantity,
        )
    ]
    seq += 1

    while remaining > 0 and _crosses(book, cmd):
        popped = (
            book.pop_best_ask_order() if cmd.side is Side.BUY else book.pop_best_bid_order()
        )
        if popped is None:
            break
        book_price, top = popped

        traded = min(remaining, top.quantity)
        remaining -= traded
        events.append(
            ExecutionEvent(
                seq=seq,
                order_id=cmd.order_id,
                kind=ExecutionEventKind.TRADE,
                price_ticks=book_price,
                quantity=traded,
            )
        )
        seq += 1

        left = top.quantity - traded
        if left > 0:
            book.requeue_front(cmd.side.opposite(), book_price, replace(top, quantity=left))

    if remaining > 0:
        book.add_resting(
            cmd.side,
            RestingOrder(
                order_id=cmd.order_id,
                price_ticks=cmd.price_ticks,
                quantity=remaining,
                time_priority=0,
            ),
        )
        events.append(
            ExecutionEvent(
                seq=seq,
                order_id=cmd.order_id,
                kind=ExecutionEventKind.RESTED,
                price_ticks=cmd.price_ticks,
                quantity=remaining,
            )
        )
        seq += 1

    return seq, events