from mbpbook.models import DEPTH, MBOEntry, MBPLevel, Side
from mbpbook.orderbook import OrderBook


def entry(order_id, price, size, action, side, ts=""):
    return MBOEntry(ts, order_id, price, size, action, side)


def test_add_order():
    book = OrderBook()
    book.process_mbo(entry(12345, 100.50, 1000, "A", Side.BID, "2025-07-29T10:00:00Z"))
    snapshot = book.get_mbp_snapshot("2025-07-29T10:00:00Z")
    assert snapshot.bids[0].price == 100.50
    assert snapshot.bids[0].size == 1000
    assert snapshot.bids[0].count == 1
    assert snapshot.ts_recv == "2025-07-29T10:00:00Z"


def test_trade_logic():
    book = OrderBook()
    book.process_mbo(entry(12345, 100.50, 1000, "A", Side.BID))
    book.process_mbo(entry(0, 100.50, 200, "T", Side.ASK))
    snapshot = book.get_mbp_snapshot("")
    assert snapshot.bids[0].size == 800


def test_price_ordering():
    book = OrderBook()
    book.process_mbo(entry(1, 100.00, 100, "A", Side.BID))
    book.process_mbo(entry(2, 101.00, 100, "A", Side.BID))
    book.process_mbo(entry(3, 99.00, 100, "A", Side.BID))
    snapshot = book.get_mbp_snapshot("")
    assert snapshot.bids[0].price == 101.00
    assert snapshot.bids[1].price == 100.00
    assert snapshot.bids[2].price == 99.00


def test_many_orders_top_of_book():
    book = OrderBook()
    for i in range(50000):
        price = 100.0 + (i % 1000) * 0.01
        side = Side.BID if i % 2 == 0 else Side.ASK
        book.process_mbo(entry(i + 1, price, 100, "A", side, "2025-07-29T10:00:00Z"))
    snapshot = book.get_mbp_snapshot("2025-07-29T10:00:00Z")
    assert snapshot.bids[0].price == 100.0 + 998 * 0.01
    assert snapshot.asks[0].price == 100.0 + 1 * 0.01
    assert snapshot.bids[0].size == 50 * 100
    assert snapshot.bids[0].count == 50
    assert snapshot.asks[0].count == 50


def test_asks_ascending():
    book = OrderBook()
    for order_id, price in enumerate([102.0, 100.0, 101.0], start=1):
        book.process_mbo(entry(order_id, price, 10, "A", Side.ASK))
    prices = [level.price for level in book.get_mbp_snapshot("").asks[:3]]
    assert prices == [100.0, 101.0, 102.0]


def test_snapshot_capped_at_depth():
    book = OrderBook()
    for order_id in range(1, 16):
        book.process_mbo(entry(order_id, float(order_id), 1, "A", Side.BID))
    snapshot = book.get_mbp_snapshot("")
    assert len(snapshot.bids) == DEPTH
    assert snapshot.bids[0].price == 15.0
    assert snapshot.bids[-1].price == 6.0
    assert all(level == MBPLevel() for level in snapshot.asks)


def test_same_price_aggregates():
    book = OrderBook()
    book.process_mbo(entry(1, 50.0, 10, "A", Side.ASK))
    book.process_mbo(entry(2, 50.0, 30, "A", Side.ASK))
    assert book.get_mbp_snapshot("").asks[0] == MBPLevel(50.0, 40, 2)


def test_zero_order_id_is_ignored():
    book = OrderBook()
    book.process_mbo(entry(0, 50.0, 10, "A", Side.BID))
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel()


def test_partial_cancel_keeps_level():
    book = OrderBook()
    book.process_mbo(entry(1, 50.0, 100, "A", Side.BID))
    book.process_mbo(entry(1, 0.0, 40, "C", Side.BID))
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel(50.0, 60, 1)


def test_full_cancel_removes_level():
    book = OrderBook()
    book.process_mbo(entry(1, 50.0, 100, "A", Side.BID))
    book.process_mbo(entry(1, 0.0, 500, "C", Side.NONE))
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel()


def test_cancel_one_of_two_orders():
    book = OrderBook()
    book.process_mbo(entry(1, 50.0, 100, "A", Side.ASK))
    book.process_mbo(entry(2, 50.0, 20, "A", Side.ASK))
    book.process_mbo(entry(1, 50.0, 100, "C", Side.ASK))
    assert book.get_mbp_snapshot("").asks[0] == MBPLevel(50.0, 20, 1)


def test_cancel_unknown_order_is_ignored():
    book = OrderBook()
    book.process_mbo(entry(1, 50.0, 100, "A", Side.ASK))
    book.process_mbo(entry(99, 50.0, 100, "C", Side.ASK))
    assert book.get_mbp_snapshot("").asks[0] == MBPLevel(50.0, 100, 1)


def test_trade_removes_exhausted_level():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 300, "A", Side.ASK))
    book.process_mbo(entry(0, 20.0, 300, "T", Side.BID))
    assert book.get_mbp_snapshot("").asks[0] == MBPLevel()


def test_trade_larger_than_level_keeps_level():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.ASK))
    book.process_mbo(entry(0, 20.0, 300, "T", Side.BID))
    level = book.get_mbp_snapshot("").asks[0]
    assert level.price == 20.0
    assert level.count == 1
    assert level.size > 100


def test_trade_without_side_is_ignored():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.BID))
    book.process_mbo(entry(0, 20.0, 50, "T", Side.NONE))
    assert book.get_mbp_snapshot("").bids[0].size == 100


def test_trade_at_missing_price_is_ignored():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.BID))
    book.process_mbo(entry(0, 21.0, 50, "T", Side.ASK))
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel(20.0, 100, 1)


def test_fill_and_unknown_actions_change_nothing():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.BID))
    before = book.get_mbp_snapshot("")
    book.process_mbo(entry(1, 20.0, 100, "F", Side.BID))
    book.process_mbo(entry(1, 20.0, 100, "X", Side.BID))
    assert book.get_mbp_snapshot("") == before


def test_reset_clears_book():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.BID))
    book.process_mbo(entry(2, 21.0, 100, "A", Side.ASK))
    book.process_mbo(entry(0, 0.0, 0, "R", Side.NONE))
    snapshot = book.get_mbp_snapshot("")
    assert all(level == MBPLevel() for level in snapshot.bids + snapshot.asks)
    book.process_mbo(entry(1, 20.0, 100, "C", Side.BID))
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel()


def test_clear_book_directly():
    book = OrderBook()
    book.process_mbo(entry(1, 20.0, 100, "A", Side.BID))
    book.clear_book()
    assert book.get_mbp_snapshot("").bids[0] == MBPLevel()