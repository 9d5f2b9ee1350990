"""Tests for per-wallet buy chunking: pure functions."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

from snipertrack.detection.chunking import chunk_large_buys, chunk_volume, split_chunks
from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import SwapEvent

T0 = datetime(2025, 1, 1, tzinfo=UTC)
THRESHOLD = Decimal("100000")
WINDOW = timedelta(minutes=10)


def _buy(tx: str, amount: str, seconds: int = 0, wallet: str = "0xa", side: str = "BUY") -> SwapEvent:
    return SwapEvent(
        wallet=wallet,
        direction=SwapDirection(side),
        timestamp=T0 + timedelta(seconds=seconds),
        amount_before_tax=Decimal(amount),
        amount_after_tax=Decimal(amount),
        tx_id=tx,
    )


class TestSplitChunks:
    def test_sorted_before_splitting(self):
        buys = [_buy("b", "1", 700), _buy("a", "1", 0), _buy("c", "1", 100)]
        chunks = split_chunks(buys, WINDOW)
        assert [[e.tx_id for e in c] for c in chunks] == [["a", "c"], ["b"]]

    def test_window_anchored_at_chunk_start(self):
        # 0, 5min, 11min: third is 11min from the start even though 6min from the second
        buys = [_buy("a", "1", 0), _buy("b", "1", 300), _buy("c", "1", 660)]
        chunks = split_chunks(buys, WINDOW)
        assert [[e.tx_id for e in c] for c in chunks] == [["a", "b"], ["c"]]

    def test_empty(self):
        assert split_chunks([], WINDOW) == []


class TestChunkVolume:
    def test_non_positive_amounts_ignored(self):
        chunk = [_buy("a", "60000"), _buy("b", "-50000"), _buy("c", "0"), _buy("d", "50000")]
        assert chunk_volume(chunk) == Decimal("110000")


class TestChunkThreshold:
    def test_exactly_threshold_does_not_qualify(self):
        buys = [_buy("a", "60000", 0), _buy("b", "40000", 60)]
        assert chunk_large_buys(buys, THRESHOLD, WINDOW) == []

    def test_just_over_threshold_qualifies(self):
        buys = [_buy("a", "60000", 0), _buy("b", "40000.01", 60)]
        result = chunk_large_buys(buys, THRESHOLD, WINDOW)
        assert {e.tx_id for e in result} == {"a", "b"}

    def test_single_large_buy_qualifies_alone(self):
        result = chunk_large_buys([_buy("a", "150000")], THRESHOLD, WINDOW)
        assert [e.tx_id for e in result] == ["a"]

    def test_zero_amount_buy_does_not_break_chunk(self):
        buys = [_buy("a", "60000", 0), _buy("z", "0", 30), _buy("b", "50000", 60)]
        result = chunk_large_buys(buys, THRESHOLD, WINDOW)
        assert {e.tx_id for e in result} == {"a", "z", "b"}


class TestChunkWindow:
    def test_exactly_ten_minutes_same_chunk(self):
        buys = [_buy("a", "60000", 0), _buy("b", "50000", 600)]
        result = chunk_large_buys(buys, THRESHOLD, WINDOW)
        assert {e.tx_id for e in result} == {"a", "b"}

    def test_ten_minutes_one_second_new_chunk(self):
        buys = [_buy("a", "60000", 0), _buy("b", "50000", 601)]
        assert chunk_large_buys(buys, THRESHOLD, WINDOW) == []

    def test_multiple_qualifying_chunks_per_wallet(self):
        buys = [
            _buy("a", "150000", 0),
            _buy("b", "10", 1200),  # own chunk, too small
            _buy("c", "200000", 3600),
        ]
        result = chunk_large_buys(buys, THRESHOLD, WINDOW)
        assert [e.tx_id for e in result] == ["a", "c"]


class TestChunkGrouping:
    def test_wallets_do_not_share_chunks(self):
        buys = [_buy("a", "60000", 0, wallet="0xa"), _buy("b", "60000", 10, wallet="0xb")]
        assert chunk_large_buys(buys, THRESHOLD, WINDOW) == []

    def test_sells_ignored(self):
        events = [_buy("a", "60000", 0), _buy("s", "90000", 10, side="SELL")]
        assert chunk_large_buys(events, THRESHOLD, WINDOW) == []

    def test_duplicates_by_tx_id_removed(self):
        buys = [_buy("a", "150000", 0), _buy("a", "150000", 0)]
        result = chunk_large_buys(buys, THRESHOLD, WINDOW)
        assert [e.tx_id for e in result] == ["a"]

    def test_missing_tx_id_not_collapsed(self):
        buys = [_buy("", "150000", 0), _buy("", "150000", 5)]
        assert len(chunk_large_buys(buys, THRESHOLD, WINDOW)) == 2
