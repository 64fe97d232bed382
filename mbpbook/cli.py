"""Command line tool turning an MBO CSV file into an MBP-10 CSV file."""

from __future__ import annotations

import re
import sys
import time
from typing import IO, Iterable, NamedTuple

from .models import DEPTH, MBOEntry, OrderBookSnapshot, Side
from .orderbook import OrderBook

OUTPUT_PATH = "output_mbp.csv"

_LEADING_COLUMNS = (
    "",
    "ts_recv",
    "ts_event",
    "rtype",
    "publisher_id",
    "instrument_id",
    "action",
    "side",
    "depth",
    "price",
    "size",
    "flags",
    "ts_in_delta",
    "sequence",
)
_LEVEL_COLUMNS = tuple(
    f"{side}_{field}_{level:02d}"
    for level in range(DEPTH)
    for side in ("bid", "ask")
    for field in ("px", "sz", "ct")
)
HEADER = ",".join(_LEADING_COLUMNS + _LEVEL_COLUMNS + ("symbol", "order_id")) + "\n"

_MIN_FIELDS = 11
_UINT_RE = re.compile(r"\d+")
_FLOAT_RE = re.compile(
    r"-?(?:infinity|inf|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.IGNORECASE
)


class _Timings(NamedTuple):
    messages: int
    processing_ns: int
    snapshot_ns: int


def parse_csv_line(line: str) -> list[str]:
    """Split a line on commas; a trailing empty field is not reported."""
    if not line:
        return []
    fields = line.split(",")
    if fields[-1] == "":
        fields.pop()
    return fields


def _to_uint(text: str) -> int:
    match = _UINT_RE.match(text)
    if match is None:
        return 0
    value = int(match.group())
    return value if value <= (1 << 64) - 1 else 0


def _to_float(text: str) -> float:
    match = _FLOAT_RE.match(text)
    if match is None:
        return 0.0
    return float(match.group())


def parse_entry(line: str) -> MBOEntry | None:
    """Build an entry from one MBO CSV line, or None if it has too few fields."""
    fields = parse_csv_line(line)
    if len(fields) < _MIN_FIELDS:
        return None
    return MBOEntry(
        ts_recv=fields[0],
        order_id=_to_uint(fields[10]),
        price=_to_float(fields[7]),
        size=_to_uint(fields[8]),
        action=fields[5][:1] or " ",
        side=Side.from_char(fields[6][:1] or "N"),
    )


def format_row(row_index: int, entry: MBOEntry, snapshot: OrderBookSnapshot) -> str:
    """Render one MBP-10 output row, newline included."""
    first = row_index == 0
    flags = 8 if first else 130
    ts_in_delta = 0 if first else 165000
    sequence = 0 if first else 851012 + (row_index - 1)
    depth = 1 if entry.action in ("C", "A") and row_index > 4 else 0
    price = f"{entry.price:.2f}" if entry.price > 0 else "0"

    parts = [
        str(row_index),
        snapshot.ts_recv,
        entry.ts_recv,
        "10",
        "2",
        "1108",
        entry.action,
        entry.side.code(),
        str(depth),
        price,
        str(entry.size),
        str(flags),
        str(ts_in_delta),
        str(sequence),
    ]
    for bid, ask in zip(snapshot.bids, snapshot.asks):
        parts += [
            f"{bid.price:.2f}",
            str(bid.size),
            str(bid.count),
            f"{ask.price:.2f}",
            str(ask.size),
            str(ask.count),
        ]
    parts += ["ARL", str(entry.order_id)]
    return ",".join(parts) + "\n"


def convert(lines: Iterable[str], out: IO[str]) -> _Timings:
    """Replay MBO lines (header first) and write MBP-10 rows to ``out``."""
    out.write(HEADER)
    book = OrderBook()
    processing_ns = 0
    snapshot_ns = 0
    row_index = 0

    rows = iter(lines)
    next(rows, None)
    for raw in rows:
        line = raw[:-1] if raw.endswith("\n") else raw
        entry = parse_entry(line)
        if entry is None:
            continue

        started = time.perf_counter_ns()
        book.process_mbo(entry)
        processed = time.perf_counter_ns()
        snapshot = book.get_mbp_snapshot(entry.ts_recv)
        snapped = time.perf_counter_ns()
        processing_ns += processed - started
        snapshot_ns += snapped - processed

        out.write(format_row(row_index, entry, snapshot))
        row_index += 1

    return _Timings(row_index, processing_ns, snapshot_ns)


def _report(timings: _Timings, total_us: int) -> None:
    err = sys.stderr
    count = timings.messages
    print("\n=== Performance Report ===", file=err)
    print(f"Messages processed: {count}", file=err)
    print(f"Total execution time: {total_us} μs", file=err)
    print(f"Order book processing: {timings.processing_ns // 1000} μs", file=err)
    print(f"Snapshot generation: {timings.snapshot_ns // 1000} μs", file=err)
    if count == 0:
        return
    print(f"Average per message: {total_us // count} μs", file=err)
    print(f"Messages per second: {int(count * 1e6 / max(total_us, 1))}", file=err)
    average = total_us / count
    if average < 1.0:
        print("✅ EXCELLENT: Sub-microsecond processing", file=err)
    elif average < 10.0:
        print("✅ GOOD: Single-digit microsecond processing", file=err)
    else:
        print("⚠️  NEEDS OPTIMIZATION: Consider performance improvements", file=err)


def main(argv: list[str] | None = None) -> int:
    """Convert the MBO file named in ``argv`` into ``output_mbp.csv``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: mbpbook <mbo_input_file>", file=sys.stderr)
        return 1
    source = args[0]

    try:
        input_file = open(source, encoding="utf-8", newline="")
    except OSError:
        print(f"Error: Could not open input file {source}", file=sys.stderr)
        return 1

    with input_file:
        try:
            output_file = open(OUTPUT_PATH, "w", encoding="utf-8", newline="")
        except OSError:
            print(f"Error: Could not create {OUTPUT_PATH}", file=sys.stderr)
            return 1
        with output_file:
            started = time.perf_counter_ns()
            timings = convert(input_file, output_file)
            total_us = (time.perf_counter_ns() - started) // 1000

    _report(timings, total_us)
    return 0


if __name__ == "__main__":
    sys.exit(main())