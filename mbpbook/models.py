"""Data types for market-by-order input and market-by-price snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEPTH = 10
"""Number of price levels on each side of a snapshot."""


class Side(Enum):
    """Side of the book an order or message refers to."""

    BID = "B"
    ASK = "A"
    NONE = "N"

    @classmethod
    def from_char(cls, char: str) -> Side:
        """Map a side code from the input feed; anything unknown is NONE."""
        if char == "B":
            return cls.BID
        if char == "A":
            return cls.ASK
        return cls.NONE

    def code(self) -> str:
        """The single-letter code used in the feed and the output."""
        return self.value


@dataclass(frozen=True)
class MBOEntry:
    """One market-by-order message."""

    ts_recv: str
    order_id: int
    price: float
    size: int
    action: str
    side: Side


@dataclass
class Order:
    """A resting order tracked by its id."""

    price: float
    size: int
    side: Side


@dataclass
class PriceLevel:
    """Aggregated size and order count at one price."""

    total_size: int = 0
    order_count: int = 0


@dataclass(frozen=True)
class MBPLevel:
    """One level of a market-by-price snapshot."""

    price: float = 0.0
    size: int = 0
    count: int = 0


def _empty_levels() -> list[MBPLevel]:
    return [MBPLevel() for _ in range(DEPTH)]


@dataclass
class OrderBookSnapshot:
    """The top levels of both sides of the book at one moment."""

    ts_recv: str = ""
    bids: list[MBPLevel] = field(default_factory=_empty_levels)
    asks: list[MBPLevel] = field(default_factory=_empty_levels)