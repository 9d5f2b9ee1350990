"""FIFO lot matching for one wallet: pure functions, no DB dependency.

Sells consume the oldest buy lot first. Lots carry both the after-tax
amount the wallet received and the before-tax cost quantity; consuming a
fraction of a lot shrinks both by the same ratio.
"""

from collections import deque
from decimal import Decimal

from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import BuyLot, LedgerResult, SwapEvent
from snipertrack.parser.swap_fields import event_sort_key


def match_sell(
    buy_queue: deque[BuyLot],
    quantity: Decimal,
    proceeds: Decimal,
) -> tuple[Decimal, Decimal]:
    """Consume ``quantity`` tokens from the head of ``buy_queue``.

    Args:
        buy_queue: Open lots, oldest first. Mutated in place.
        quantity: Tokens leaving the wallet (positive).
        proceeds: Total value received for ``quantity``.

    Returns:
        (realized_pnl, matched_quantity). Quantity beyond the queue is left unmatched.
    """
    realized = Decimal(0)
    to_match = quantity

    while to_match > 0 and buy_queue:
        lot = buy_queue[0]
        matched = min(to_match, lot.amount_remaining)

        ratio = matched / lot.amount_remaining
        cost = lot.cost_basis_remaining * ratio
        realized += proceeds * matched / quantity - cost * lot.price

        lot.amount_remaining -= matched
        lot.cost_basis_remaining -= cost
        to_match -= matched

        if lot.amount_remaining <= 0:
            buy_queue.popleft()

    return realized, quantity - to_match


def replay_wallet(events: list[SwapEvent], latest_price: Decimal) -> LedgerResult:
    """Replay one wallet's full swap history through a FIFO queue.

    Args:
        events: Every swap of the wallet for one token, any order.
        latest_price: Token's most recent market price, used to value what is left.

    Returns:
        Unrounded LedgerResult. Never raises on malformed amounts (they are 0 upstream).
    """
    wallet = events[0].wallet if events else ""
    result = LedgerResult(wallet=wallet)
    buy_queue: deque[BuyLot] = deque()

    for event in sorted(events, key=event_sort_key):
        result.total_tax += event.tax
        result.total_fees += event.fee

        if event.direction == SwapDirection.BUY:
            result.buy_count += 1
            result.buy_price_sum += event.price
            if result.first_buy_time is None:
                result.first_buy_time = event.timestamp

            # Zero-volume buys are noise: counted, never enqueued
            if event.amount_before_tax > 0 and event.amount_after_tax > 0:
                buy_queue.append(BuyLot(
                    amount_remaining=event.amount_after_tax,
                    cost_basis_remaining=event.amount_before_tax,
                    price=event.price,
                ))
                result.tokens_bought += event.amount_after_tax

        elif event.direction == SwapDirection.SELL:
            result.sell_count += 1
            result.sell_price_sum += event.price
            result.last_sell_time = event.timestamp

            quantity = event.amount_after_tax
            if quantity <= 0:
                continue
            realized, matched = match_sell(buy_queue, quantity, quantity * event.price)
            result.realized_pnl += realized
            result.tokens_sold_matched += matched

    result.tokens_remaining = sum((lot.amount_remaining for lot in buy_queue), Decimal(0))
    result.unrealized_pnl = result.tokens_remaining * latest_price
    return result
