"""Swap record normalization: raw storage documents -> SwapEvent.

Swap documents carry per-token field names for the taxed legs
(``{SYMBOL}_OUT_BeforeTax`` etc.). Everything past this module works on
the fixed ``SwapEvent`` shape and never sees a token symbol.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import SwapEvent

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

SWAP_TYPES: dict[str, SwapDirection] = {
    "buy": SwapDirection.BUY,
    "sell": SwapDirection.SELL,
}

# Decimal exponents outside this range are treated as garbage
MAX_EXPONENT = 100


class SwapFieldMap:
    """Field names of the taxed legs for one token symbol."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol.upper()

    @property
    def out_before_tax(self) -> str:
        return f"{self.symbol}_OUT_BeforeTax"

    @property
    def out_after_tax(self) -> str:
        return f"{self.symbol}_OUT_AfterTax"

    @property
    def in_before_tax(self) -> str:
        return f"{self.symbol}_IN_BeforeTax"

    @property
    def in_after_tax(self) -> str:
        return f"{self.symbol}_IN_AfterTax"

    def amount_fields(self, direction: SwapDirection) -> tuple[str, str]:
        """(before_tax, after_tax) field names for a swap leg."""
        if direction == SwapDirection.BUY:
            return self.out_before_tax, self.out_after_tax
        return self.in_before_tax, self.in_after_tax


def to_decimal(value: Any, default: Decimal = Decimal(0)) -> Decimal:
    """Coerce a stored numeric value to Decimal. Anything unusable -> default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError):
            return default
    else:
        return default
    if not result.is_finite():
        return default
    if not result:
        return Decimal(0)
    if abs(result.adjusted()) > MAX_EXPONENT:
        return default
    return result


def get_field(record: dict, field: str, default: Decimal = Decimal(0)) -> Decimal:
    return to_decimal(record.get(field), default)


def normalize_address(addr: Optional[str]) -> str:
    if not addr:
        return ""
    return str(addr).strip().lower()


def _parse_readable(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(" UTC"):
            text = text[:-4]
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _parse_epoch(value: Any) -> Optional[datetime]:
    seconds = to_decimal(value)
    if seconds == 0:
        return None
    try:
        return datetime.fromtimestamp(float(seconds), tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def resolve_instant(record: dict) -> datetime:
    """Reconcile ``timestampReadable`` / ``timestamp`` into one UTC instant.

    The readable field wins when it parses; epoch seconds are the fallback.
    """
    return (
        _parse_readable(record.get("timestampReadable"))
        or _parse_epoch(record.get("timestamp"))
        or EPOCH
    )


def normalize_swap(record: dict, field_map: SwapFieldMap) -> Optional[SwapEvent]:
    """Convert one raw swap document. Returns None if it is neither a buy nor a sell."""
    direction = SWAP_TYPES.get(str(record.get("swapType") or "").strip().lower())
    if direction is None:
        logger.debug("Skipping swap %s with type %r", record.get("txHash"), record.get("swapType"))
        return None

    before_field, after_field = field_map.amount_fields(direction)
    return SwapEvent(
        wallet=normalize_address(record.get("maker") or record.get("from")),
        direction=direction,
        block_number=int(get_field(record, "blockNumber")),
        timestamp=resolve_instant(record),
        amount_before_tax=get_field(record, before_field),
        amount_after_tax=get_field(record, after_field),
        price=get_field(record, "genesis_usdc_price"),
        tax=get_field(record, "Tax_1pct"),
        fee=get_field(record, "transactionFee"),
        tx_id=str(record.get("txHash") or ""),
    )


def normalize_swaps(records: Iterable[dict], symbol: str) -> list[SwapEvent]:
    field_map = SwapFieldMap(symbol)
    events: list[SwapEvent] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.debug("Skipping non-mapping swap record of type %s", type(record).__name__)
            continue
        event = normalize_swap(record, field_map)
        if event is not None:
            events.append(event)
    return events


def event_sort_key(event: SwapEvent) -> tuple[datetime, int]:
    return event.timestamp, event.block_number


def latest_price(events: Iterable[SwapEvent]) -> Decimal:
    """Market price of the most recent swap in the batch (0 if empty)."""
    latest = max(events, key=event_sort_key, default=None)
    return latest.price if latest is not None else Decimal(0)
