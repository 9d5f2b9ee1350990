"""Pydantic schemas for sniper API."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class SniperResponse(BaseModel):
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

    model_config = {"from_attributes": True}


class GlobalSniperResponse(SniperResponse):
    token: str
    token_name: str
