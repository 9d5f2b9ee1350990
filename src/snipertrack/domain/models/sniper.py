"""Domain types for sniper detection and per-wallet FIFO PnL."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from snipertrack.domain.enums.swap import SwapDirection


class SwapEvent(BaseModel):
    """One normalized on-chain swap for a single token. Read-only."""

    wallet: str  # lower-cased maker address
    direction: SwapDirection
    block_number: int = 0
    timestamp: datetime  # UTC
    amount_before_tax: Decimal = Decimal(0)
    amount_after_tax: Decimal = Decimal(0)
    price: Decimal = Decimal(0)  # USD per token at execution
    tax: Decimal = Decimal(0)  # token units
    fee: Decimal = Decimal(0)  # network fee units
    tx_id: str = ""

    model_config = {"frozen": True}


class BuyLot(BaseModel):
    """An unconsumed (or partially consumed) buy in a wallet's FIFO queue."""

    amount_remaining: Decimal  # after-tax tokens still held
    cost_basis_remaining: Decimal  # before-tax quantity attributable to amount_remaining
    price: Decimal


class LedgerResult(BaseModel):
    """Raw, unrounded output of replaying one wallet's history."""

    wallet: str
    realized_pnl: Decimal = Decimal(0)
    unrealized_pnl: Decimal = Decimal(0)  # gross holding value, not a delta
    tokens_remaining: Decimal = Decimal(0)
    tokens_bought: Decimal = Decimal(0)
    tokens_sold_matched: Decimal = Decimal(0)
    buy_count: int = 0
    sell_count: int = 0
    buy_price_sum: Decimal = Decimal(0)
    sell_price_sum: Decimal = Decimal(0)
    total_tax: Decimal = Decimal(0)
    total_fees: Decimal = Decimal(0)
    first_buy_time: Optional[datetime] = None
    last_sell_time: Optional[datetime] = None


class SniperResult(BaseModel):
    """Per-wallet output record, rounded to 4 decimal places."""

    wallet: str
    realized_pnl: Decimal
    unrealized_pnl: Decimal
    tokens_remaining: Decimal
    buy_count: int
    sell_count: int
    first_buy_time: Optional[datetime] = None
    last_sell_time: Optional[datetime] = None
    avg_buy_price: Decimal
    avg_sell_price: Decimal
    total_tax: Decimal
    total_fees: Decimal


class DetectionParams(BaseModel):
    """Thresholds for the three sniper heuristics."""

    chunk_volume_threshold: Decimal = Decimal("100000")  # strict >
    chunk_window: timedelta = timedelta(minutes=10)  # inclusive
    fee_threshold: Decimal = Decimal("0.000002")  # strict >
    launch_grace_blocks: int = 100  # inclusive
    quick_exit_window: timedelta = timedelta(minutes=20)  # inclusive, delta > 0


class TokenStats(BaseModel):
    """Headline swap statistics for a token."""

    total_swaps: int = 0
    unique_traders: int = 0
    buy_volume: Decimal = Decimal(0)
    sell_volume: Decimal = Decimal(0)
