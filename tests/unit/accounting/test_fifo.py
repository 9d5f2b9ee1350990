"""Tests for per-wallet FIFO replay: pure functions."""

from collections import deque
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from snipertrack.accounting.fifo import match_sell, replay_wallet
from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import BuyLot, SwapEvent

T0 = datetime(2025, 1, 1, tzinfo=UTC)


def _swap(
    side: str,
    before: str,
    after: str,
    price: str,
    minutes: int = 0,
    tax: str = "0",
    fee: str = "0",
) -> SwapEvent:
    return SwapEvent(
        wallet="0xa",
        direction=SwapDirection(side),
        timestamp=T0 + timedelta(minutes=minutes),
        amount_before_tax=Decimal(before),
        amount_after_tax=Decimal(after),
        price=Decimal(price),
        tax=Decimal(tax),
        fee=Decimal(fee),
    )


class TestReplayBasic:
    def test_single_buy_sell(self):
        events = [_swap("BUY", "100", "100", "1", 0), _swap("SELL", "100", "100", "3", 10)]
        result = replay_wallet(events, Decimal("5"))

        assert result.realized_pnl == Decimal("200")
        assert result.tokens_remaining == Decimal(0)
        assert result.unrealized_pnl == Decimal(0)
        assert result.buy_count == 1
        assert result.sell_count == 1

    def test_only_buys(self):
        events = [_swap("BUY", "100", "100", "1", 0), _swap("BUY", "50", "50", "2", 5)]
        result = replay_wallet(events, Decimal("3"))

        assert result.realized_pnl == Decimal(0)
        assert result.tokens_remaining == Decimal("150")
        assert result.unrealized_pnl == Decimal("450")  # gross holding value
        assert result.last_sell_time is None

    def test_no_events(self):
        result = replay_wallet([], Decimal("1"))
        assert result.wallet == ""
        assert result.tokens_remaining == Decimal(0)
        assert result.buy_count == 0

    def test_unsorted_input_replayed_in_time_order(self):
        events = [_swap("SELL", "100", "100", "3", 10), _swap("BUY", "100", "100", "1", 0)]
        result = replay_wallet(events, Decimal(0))
        assert result.realized_pnl == Decimal("200")
        assert result.tokens_remaining == Decimal(0)


class TestReplayFIFOOrder:
    def test_oldest_lot_consumed_first(self):
        events = [
            _swap("BUY", "100", "100", "1", 0),
            _swap("BUY", "100", "100", "2", 5),
            _swap("SELL", "100", "100", "3", 10),
        ]
        result = replay_wallet(events, Decimal(0))

        assert result.realized_pnl == Decimal("200")  # 300 - 100 * 1, second lot untouched
        assert result.tokens_remaining == Decimal("100")

    def test_sell_spans_multiple_lots(self):
        events = [
            _swap("BUY", "100", "100", "1", 0),
            _swap("BUY", "100", "100", "2", 5),
            _swap("SELL", "150", "150", "3", 10),
        ]
        result = replay_wallet(events, Decimal(0))

        # proceeds 450; cost 100*1 + 50*2
        assert result.realized_pnl == Decimal("250")
        assert result.tokens_remaining == Decimal("50")


class TestReplayTaxAsymmetry:
    def test_scenario_sniper(self):
        events = [
            _swap("BUY", "200000", "198000", "0.01", 0, fee="0.00001"),
            _swap("SELL", "198000", "196000", "0.02", 5),
        ]
        result = replay_wallet(events, Decimal("0.02"))

        assert abs(result.realized_pnl - Decimal("1940")) < Decimal("1")
        assert result.tokens_remaining == Decimal("2000")
        assert result.unrealized_pnl == Decimal("40")

    def test_cost_basis_shrinks_with_amount(self):
        lot = BuyLot(amount_remaining=Decimal("100"), cost_basis_remaining=Decimal("110"), price=Decimal("1"))
        queue = deque([lot])
        realized, matched = match_sell(queue, Decimal("25"), Decimal("50"))

        assert matched == Decimal("25")
        assert realized == Decimal("50") - Decimal("27.5")
        assert lot.amount_remaining == Decimal("75")
        assert lot.cost_basis_remaining == Decimal("82.5")
        assert len(queue) == 1

    def test_proceeds_apportioned_across_lots(self):
        queue = deque([
            BuyLot(amount_remaining=Decimal("40"), cost_basis_remaining=Decimal("40"), price=Decimal("1")),
            BuyLot(amount_remaining=Decimal("60"), cost_basis_remaining=Decimal("60"), price=Decimal("2")),
        ])
        realized, matched = match_sell(queue, Decimal("100"), Decimal("500"))

        # 200 - 40 + 300 - 120
        assert realized == Decimal("340")
        assert matched == Decimal("100")
        assert not queue


class TestReplayEdgeCases:
    def test_oversell_is_absorbed(self):
        events = [_swap("BUY", "100", "100", "1", 0), _swap("SELL", "300", "300", "2", 5)]
        result = replay_wallet(events, Decimal("2"))

        # Only the matched third of the proceeds is realized
        assert result.realized_pnl == Decimal("100")
        assert result.tokens_sold_matched == Decimal("100")
        assert result.tokens_remaining == Decimal(0)

    def test_sell_without_buys(self):
        result = replay_wallet([_swap("SELL", "100", "100", "2", 0)], Decimal("2"))
        assert result.realized_pnl == Decimal(0)
        assert result.sell_count == 1

    def test_zero_volume_buy_counted_not_enqueued(self):
        events = [
            _swap("BUY", "0", "0", "5", 0, tax="1", fee="0.1"),
            _swap("BUY", "100", "100", "1", 1),
            _swap("SELL", "100", "100", "2", 2),
        ]
        result = replay_wallet(events, Decimal(0))

        assert result.buy_count == 2
        assert result.buy_price_sum == Decimal("6")
        assert result.realized_pnl == Decimal("100")
        assert result.total_tax == Decimal("1")
        assert result.total_fees == Decimal("0.1")

    def test_zero_volume_sell_counted_not_matched(self):
        events = [_swap("BUY", "100", "100", "1", 0), _swap("SELL", "0", "0", "2", 5, tax="3")]
        result = replay_wallet(events, Decimal(0))

        assert result.sell_count == 1
        assert result.tokens_remaining == Decimal("100")
        assert result.total_tax == Decimal("3")

    def test_first_buy_and_last_sell_times(self):
        events = [
            _swap("BUY", "100", "100", "1", 0),
            _swap("SELL", "10", "10", "1", 3),
            _swap("BUY", "100", "100", "1", 4),
            _swap("SELL", "10", "10", "1", 9),
        ]
        result = replay_wallet(events, Decimal(0))

        assert result.first_buy_time == T0
        assert result.last_sell_time == T0 + timedelta(minutes=9)


class TestConservation:
    def test_remaining_is_bought_minus_matched(self):
        events = [
            _swap("BUY", "1000", "990", "1", 0),
            _swap("SELL", "400", "396", "2", 1),
            _swap("BUY", "500", "495", "1.5", 2),
            _swap("SELL", "2000", "1980", "3", 3),
            _swap("BUY", "300", "297", "1", 4),
        ]
        result = replay_wallet(events, Decimal("1"))

        assert result.tokens_remaining == result.tokens_bought - result.tokens_sold_matched
        assert result.tokens_remaining == Decimal("297")
