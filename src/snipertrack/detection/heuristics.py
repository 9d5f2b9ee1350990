"""Sniper classification: high fee, early entry, quick exit."""

from datetime import timedelta
from decimal import Decimal

from snipertrack.detection.chunking import group_by_wallet
from snipertrack.domain.enums.swap import SwapDirection
from snipertrack.domain.models.sniper import DetectionParams, SwapEvent


def high_fee_buys(buys: list[SwapEvent], fee_threshold: Decimal) -> list[SwapEvent]:
    return [e for e in buys if e.fee > fee_threshold]


def early_buys(buys: list[SwapEvent], launch_block: int, grace_blocks: int) -> list[SwapEvent]:
    """Buys at or before ``launch_block + grace_blocks``."""
    cutoff = launch_block + grace_blocks
    return [e for e in buys if e.block_number <= cutoff]


def has_quick_exit(buys: list[SwapEvent], sells: list[SwapEvent], window: timedelta) -> bool:
    """True if some sell lands strictly after a buy and within ``window`` of it."""
    for buy in buys:
        for sell in sells:
            delta = sell.timestamp - buy.timestamp
            if timedelta(0) < delta <= window:
                return True
    return False


def classify_snipers(
    chunked_buys: list[SwapEvent],
    events: list[SwapEvent],
    launch_block: int,
    params: DetectionParams,
) -> set[str]:
    """Narrow chunk-qualifying buys to the set of sniper wallets.

    Args:
        chunked_buys: Output of chunk_large_buys.
        events: The token's full swap batch; sell history comes from here unfiltered.
        launch_block: Reference block for the early-entry window.
        params: Fee, grace-block and quick-exit thresholds.
    """
    candidates = high_fee_buys(chunked_buys, params.fee_threshold)
    candidates = early_buys(candidates, launch_block, params.launch_grace_blocks)
    if not candidates:
        return set()

    sells_by_wallet = group_by_wallet([e for e in events if e.direction == SwapDirection.SELL])

    snipers: set[str] = set()
    for wallet, buys in group_by_wallet(candidates).items():
        if not wallet:
            continue
        sells = sells_by_wallet.get(wallet)
        if not sells:
            continue
        if has_quick_exit(buys, sells, params.quick_exit_window):
            snipers.add(wallet)
    return snipers
