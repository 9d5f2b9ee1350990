"""Pydantic schemas for token and swap API."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field


class TokenCreateRequest(BaseModel):
    symbol: str = Field(min_length=1, max_length=50)
    name: str = ""
    block_number: Optional[int] = None  # creation block
    genesis_block: Optional[int] = None


class TokenResponse(BaseModel):
    id: uuid.UUID
    symbol: str
    name: str
    block_number: Optional[int] = None
    genesis_block: Optional[int] = None
    launch_block: int

    model_config = {"from_attributes": True}


class TokenStatsResponse(BaseModel):
    total_swaps: int
    unique_traders: int
    buy_volume: Decimal
    sell_volume: Decimal


class TokenDetailResponse(TokenResponse):
    stats: TokenStatsResponse


class SwapEventResponse(BaseModel):
    tx_id: str
    wallet: str
    direction: str
    block_number: int
    timestamp: datetime
    amount_before_tax: Decimal
    amount_after_tax: Decimal
    price: Decimal
    tax: Decimal
    fee: Decimal


class SwapListResponse(BaseModel):
    swaps: list[SwapEventResponse]
    total: int
    limit: int
    offset: int


class SwapImportRequest(BaseModel):
    swaps: list[dict[str, Any]]


class SwapImportResponse(BaseModel):
    received: int
    imported: int
