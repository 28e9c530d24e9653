"""Command models consumed by the matching runtime.

Every engine command carries an idempotency key used for duplicate
suppression, and a primary order id used for partition routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from tickmatch.types import OrderType, Side, TimeInForce


@dataclass(frozen=True)
class OrderCommand:
    """New-order intent: prices in integer ticks, quantities in lots."""

    idempotency_key: int
    order_id: int
    side: Side
    order_type: OrderType
    tif: TimeInForce
    price_ticks: int
    quantity: int


@dataclass(frozen=True)
class NewOrder:
    """Submit a new order."""

    order: OrderCommand

    @property
    def idempotency_key(self) -> int:
        return self.order.idempotency_key

    def primary_order_id(self) -> int:
        """Order id used for partition routing."""
        return self.order.order_id


@dataclass(frozen=True)
class CancelOrder:
    """Cancel a resting order."""

    idempotency_key: int
    order_id: int

    def primary_order_id(self) -> int:
        """Order id used for partition routing."""
        return self.order_id


@dataclass(frozen=True)
class ReplaceOrder:
    """Cancel an existing order, then submit a fresh one with new time priority."""

    idempotency_key: int
    cancel_order_id: int
    new_order: OrderCommand

    def primary_order_id(self) -> int:
        """Order id used for partition routing: the order being replaced."""
        return self.cancel_order_id


EngineCommand = Union[NewOrder, CancelOrder, ReplaceOrder]