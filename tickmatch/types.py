"""Core domain enums used by the matching engine.

Order identifiers are plain integers throughout the package.
"""

from __future__ import annotations

import enum


class Side(enum.Enum):
    """Side of an order-book action."""

    BUY = "buy"
    SELL = "sell"

    def opposite(self) -> "Side":
        """Return the side this side trades against."""
        return Side.SELL if self is Side.BUY else Side.BUY


class OrderType(enum.Enum):
    """Supported order types."""

    LIMIT = "limit"
    MARKET = "market"


class TimeInForce(enum.Enum):
    """Time-in-force behaviour for resting and matching semantics."""

    GTC = "gtc"
    IOC = "ioc"
    FOK = "fok"