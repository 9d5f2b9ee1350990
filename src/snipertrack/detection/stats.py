"""Headline statistics for a token's swap batch."""

from decimal import Decimal

from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import SwapEvent, TokenStats


def summarize_swaps(events: list[SwapEvent]) -> TokenStats:
    """Swap count, distinct makers, and before-tax volume per side."""
    return TokenStats(
        total_swaps=len(events),
        unique_traders=len({e.wallet for e in events if e.wallet}),
        buy_volume=sum(
            (e.amount_before_tax for e in events if e.direction == SwapDirection.BUY), Decimal(0)
        ),
        sell_volume=sum(
            (e.amount_before_tax for e in events if e.direction == SwapDirection.SELL), Decimal(0)
        ),
    )
