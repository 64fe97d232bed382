# mbpbook

mbpbook turns a market-by-order (MBO) message file into market-by-price
(MBP-10) snapshots. It reads the MBO messages one at a time and keeps an
order book up to date. After each message it writes out the top ten bid
levels and the top ten ask levels.

## Installation

```
pip install .
```

Use `pip install .[test]` to add pytest for running the tests.

## Command line

```
mbpbook data/mbo.csv
```

The command takes exactly one argument, the input file. With any other
number of arguments it prints a usage line and exits with status 1. It
also exits with status 1 if the input file cannot be opened or
`output_mbp.csv` cannot be created.

The input is a CSV file. Its first row is a header and is skipped. These
columns are read:

| Column | Field    |
|--------|----------|
| 0      | ts_recv  |
| 5      | action   |
| 6      | side     |
| 7      | price    |
| 8      | size     |
| 10     | order_id |

Blank lines are skipped, and so are rows with fewer than 11 fields. A
number that cannot be read counts as 0.

Output goes to `output_mbp.csv` in the current directory. It starts with
a header row, and each input message then gives one row. Each row has:

- the message metadata,
- ten bid levels and ten ask levels (`bid_px_00` … `ask_ct_09`),
- the symbol and the order id.

Level prices are printed with two decimals. The message price is printed
the same way, or as `0` when it is not positive. Some columns are filled
with fixed values rather than taken from the input:

- `rtype` is 10, `publisher_id` is 2 and `instrument_id` is 1108.
- The symbol is `ARL`.
- `flags`, `ts_in_delta`, `sequence` and `depth` come from the row's position.

A short performance report goes to standard error. It gives the message
count, the total time, and the time spent updating the book and building
snapshots.

## Library use

```python
from mbpbook.models import MBOEntry, Side
from mbpbook.orderbook import OrderBook

book = OrderBook()
book.process_mbo(MBOEntry("2025-07-29T10:00:00Z", 1, 100.50, 1000, "A", Side.BID))
book.process_mbo(MBOEntry("2025-07-29T10:00:01Z", 0, 100.50, 200, "T", Side.ASK))

snapshot = book.get_mbp_snapshot("2025-07-29T10:00:01Z")
print(snapshot.bids[0].price, snapshot.bids[0].size, snapshot.bids[0].count)
# 100.5 800 1
```

What each action does in `OrderBook.process_mbo`:

- `A` adds an order. An order id of 0 is ignored.
- `C` cancels an order by id. It cancels the whole order if the size given covers it, and otherwise only part of it. A price level is removed once it holds no orders.
- `T` is a trade. It takes its size from the level on the opposite side at the trade price. The level is removed when its size reaches zero. Individual orders are not changed.
- `R` clears the book, as `OrderBook.clear_book()` does.
- `F` and any other action leave the book unchanged.

`OrderBook.get_mbp_snapshot(ts_recv)` returns an `OrderBookSnapshot`. It
holds ten `MBPLevel` entries per side. Bids run from the highest price
down and asks from the lowest price up. Unused levels are all zeros.

`Side.from_char` maps `"B"` and `"A"` to `Side.BID` and `Side.ASK`, and
maps anything else to `Side.NONE`. `Side.code()` gives the letter back.

### In-memory conversion

The helpers in `mbpbook.cli` work without files:

- `parse_csv_line(line)` splits a line on commas.
- `parse_entry(line)` builds an `MBOEntry`. It returns `None` if the line has too few fields.
- `format_row(row_index, entry, snapshot)` renders one output row.
- `convert(lines, out)` reads an iterable of CSV lines, starting with the header, and writes the header and the MBP rows to a text stream.

## Limitations

The output path is always `output_mbp.csv` and cannot be changed from the
command line. The metadata columns listed above are not read from the
input, so they do not reflect the real feed.