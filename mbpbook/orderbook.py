"""A price-level order book driven by market-by-order messages."""

from __future__ import annotations

from operator import itemgetter

from .models import DEPTH, MBOEntry, MBPLevel, Order, OrderBookSnapshot, PriceLevel, Side

# Level sizes and counts are unsigned 64-bit quantities and wrap on underflow.
_U64 = (1 << 64) - 1


class OrderBook:
    """Tracks resting orders and aggregates them into price levels."""

    def __init__(self) -> None:
        self._bids: dict[float, PriceLevel] = {}
        self._asks: dict[float, PriceLevel] = {}
        self._orders: dict[int, Order] = {}

    def process_mbo(self, entry: MBOEntry) -> None:
        """Apply one message to the book; unknown actions are ignored."""
        match entry.action:
            case "A":
                self._add_order(entry)
            case "C":
                self._cancel_order(entry)
            case "T":
                self._execute_trade(entry)
            case "R":
                self.clear_book()
            case _:
                pass

    def clear_book(self) -> None:
        """Remove every order and level."""
        self._bids.clear()
        self._asks.clear()
        self._orders.clear()

    def get_mbp_snapshot(self, ts_recv: str) -> OrderBookSnapshot:
        """Return the best levels of each side, padded with empty levels."""
        snapshot = OrderBookSnapshot(ts_recv=ts_recv)
        asks = sorted(self._asks.items(), key=itemgetter(0))[:DEPTH]
        bids = sorted(self._bids.items(), key=itemgetter(0), reverse=True)[:DEPTH]
        for position, (price, level) in enumerate(asks):
            snapshot.asks[position] = MBPLevel(price, level.total_size, level.order_count)
        for position, (price, level) in enumerate(bids):
            snapshot.bids[position] = MBPLevel(price, level.total_size, level.order_count)
        return snapshot

    def _levels(self, side: Side) -> dict[float, PriceLevel] | None:
        if side is Side.BID:
            return self._bids
        if side is Side.ASK:
            return self._asks
        return None

    def _add_order(self, entry: MBOEntry) -> None:
        if entry.order_id == 0:
            return
        self._orders[entry.order_id] = Order(entry.price, entry.size, entry.side)
        levels = self._levels(entry.side)
        if levels is None:
            return
        level = levels.setdefault(entry.price, PriceLevel())
        level.total_size = (level.total_size + entry.size) & _U64
        level.order_count = (level.order_count + 1) & _U64

    def _cancel_order(self, entry: MBOEntry) -> None:
        order = self._orders.get(entry.order_id)
        if order is None:
            return
        cancel_size = entry.size
        full_cancel = cancel_size >= order.size
        if full_cancel:
            cancel_size = order.size
            del self._orders[entry.order_id]
        else:
            order.size -= cancel_size

        levels = self._levels(order.side)
        if levels is None:
            return
        level = levels.setdefault(order.price, PriceLevel())
        level.total_size = (level.total_size - cancel_size) & _U64
        if full_cancel:
            level.order_count = (level.order_count - 1) & _U64
        if level.order_count == 0:
            del levels[order.price]

    def _execute_trade(self, entry: MBOEntry) -> None:
        # A trade on one side consumes liquidity resting on the opposite side.
        if entry.side is Side.ASK:
            levels = self._bids
        elif entry.side is Side.BID:
            levels = self._asks
        else:
            return
        level = levels.get(entry.price)
        if level is None:
            return
        remaining = level.total_size - entry.size
        if remaining == 0:
            del levels[entry.price]
        else:
            level.total_size = remaining & _U64