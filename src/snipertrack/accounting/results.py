"""Result assembly: LedgerResult -> rounded SniperResult."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from snipertrack.domain.models.sniper import LedgerResult, SniperResult

PRECISION = Decimal("0.0001")


def round_amount(value: Decimal) -> Decimal:
    return value.quantize(PRECISION, rounding=ROUND_HALF_UP)


def average(total: Decimal, count: int) -> Decimal:
    return total / count if count else Decimal(0)


def assemble_result(ledger: LedgerResult) -> SniperResult:
    return SniperResult(
        wallet=ledger.wallet,
        realized_pnl=round_amount(ledger.realized_pnl),
        unrealized_pnl=round_amount(ledger.unrealized_pnl),
        tokens_remaining=round_amount(ledger.tokens_remaining),
        buy_count=ledger.buy_count,
        sell_count=ledger.sell_count,
        first_buy_time=ledger.first_buy_time,
        last_sell_time=ledger.last_sell_time,
        avg_buy_price=round_amount(average(ledger.buy_price_sum, ledger.buy_count)),
        avg_sell_price=round_amount(average(ledger.sell_price_sum, ledger.sell_count)),
        total_tax=round_amount(ledger.total_tax),
        total_fees=round_amount(ledger.total_fees),
    )


def assemble_results(ledgers: Iterable[LedgerResult]) -> list[SniperResult]:
    """One SniperResult per ledger, in input order. Sorting is the caller's concern."""
    return [assemble_result(ledger) for ledger in ledgers]
