"""Immutable execution events emitted by the engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ExecutionEventKind(enum.Enum):
    """Classification of an emitted event."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    TRADE = "trade"
    RESTED = "rested"
    CANCELED = "canceled"


@dataclass(frozen=True)
class ExecutionEvent:
    """One append-only fact produced by matching or an order-state change.

    ``seq`` is a monotonic sequence number scoped to one engine instance.
    """

    seq: int
    order_id: int
    kind: ExecutionEventKind
    price_ticks: int
    quantity: int