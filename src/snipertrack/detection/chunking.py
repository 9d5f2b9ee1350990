"""Chunk aggregation: per-wallet bursts of buys within a time window.

Pure functions, no DB dependency.
"""

from collections import defaultdict
from datetime import timedelta
from decimal import Decimal

from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import SwapEvent
from snipertrack.parser.swap_fields import event_sort_key


def group_by_wallet(events: list[SwapEvent]) -> dict[str, list[SwapEvent]]:
    groups: dict[str, list[SwapEvent]] = defaultdict(list)
    for event in events:
        groups[event.wallet].append(event)
    return groups


def split_chunks(buys: list[SwapEvent], window: timedelta) -> list[list[SwapEvent]]:
    """Split one wallet's buys (any order) into chunks anchored at their first event.

    An event joins the open chunk while ``event.timestamp - chunk_start <= window``.
    """
    chunks: list[list[SwapEvent]] = []
    chunk: list[SwapEvent] = []
    chunk_start = None

    for event in sorted(buys, key=event_sort_key):
        if chunk and event.timestamp - chunk_start <= window:
            chunk.append(event)
            continue
        if chunk:
            chunks.append(chunk)
        chunk = [event]
        chunk_start = event.timestamp

    if chunk:
        chunks.append(chunk)
    return chunks


def chunk_volume(chunk: list[SwapEvent]) -> Decimal:
    """Cumulative before-tax volume; non-positive amounts add nothing."""
    return sum((e.amount_before_tax for e in chunk if e.amount_before_tax > 0), Decimal(0))


def chunk_large_buys(
    events: list[SwapEvent],
    threshold: Decimal,
    window: timedelta,
) -> list[SwapEvent]:
    """Return every buy belonging to a chunk whose volume exceeds ``threshold``.

    Args:
        events: Swaps for one token; sells are ignored.
        threshold: Strict lower bound on a chunk's before-tax volume.
        window: Maximum distance from a chunk's first buy.

    Returns:
        Flat list of qualifying buys, deduplicated by tx_id.
    """
    buys = [e for e in events if e.direction == SwapDirection.BUY]
    qualifying: list[SwapEvent] = []

    for wallet_buys in group_by_wallet(buys).values():
        for chunk in split_chunks(wallet_buys, window):
            if chunk_volume(chunk) > threshold:
                qualifying.extend(chunk)

    seen: set[str] = set()
    unique: list[SwapEvent] = []
    for event in qualifying:
        if event.tx_id:
            if event.tx_id in seen:
                continue
            seen.add(event.tx_id)
        unique.append(event)
    return unique
