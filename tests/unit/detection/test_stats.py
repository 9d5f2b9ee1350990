from datetime import UTC, datetime
from decimal import Decimal

from snipertrack.detection.stats import summarize_swaps
from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import SwapEvent


def _swap(wallet: str, side: str, amount: str) -> SwapEvent:
    return SwapEvent(
        wallet=wallet,
        direction=SwapDirection(side),
        timestamp=datetime(2025, 1, 1, tzinfo=UTC),
        amount_before_tax=Decimal(amount),
    )


class TestSummarizeSwaps:
    def test_counts_and_volumes(self):
        stats = summarize_swaps([
            _swap("0xa", "BUY", "100"),
            _swap("0xa", "SELL", "40"),
            _swap("0xb", "BUY", "10.5"),
            _swap("", "SELL", "1"),
        ])
        assert stats.total_swaps == 4
        assert stats.unique_traders == 2
        assert stats.buy_volume == Decimal("110.5")
        assert stats.sell_volume == Decimal("41")

    def test_empty(self):
        stats = summarize_swaps([])
        assert stats.total_swaps == 0
        assert stats.buy_volume == Decimal(0)
