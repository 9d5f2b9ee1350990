"""SniperEngine: chunking, classification, FIFO replay and assembly for one token."""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Iterable, Optional

from snipertrack.accounting.fifo import replay_wallet
from snipertrack.accounting.results import assemble_results
from snipertrack.detection.chunking import chunk_large_buys, group_by_wallet
from snipertrack.detection.heuristics import classify_snipers
from snipertrack.domain.models.sniper import DetectionParams, LedgerResult, SniperResult, SwapEvent
from snipertrack.parser.swap_fields import latest_price, normalize_swaps

logger = logging.getLogger(__name__)


class SniperEngine:
    """Detect sniper wallets in one token's swap batch and compute their PnL.

    Stateless: the same batch and launch block always yield the same results.
    """

    def __init__(self, params: Optional[DetectionParams] = None, max_workers: int = 1) -> None:
        self._params = params or DetectionParams()
        self._max_workers = max_workers

    @property
    def params(self) -> DetectionParams:
        return self._params

    def detect(self, records: Iterable[dict], symbol: str, launch_block: int) -> list[SniperResult]:
        """Run the full pipeline over raw swap documents for ``symbol``."""
        events = normalize_swaps(records, symbol)
        results = self.detect_events(events, launch_block)
        logger.info("Token %s: %d swaps, %d snipers", symbol.upper(), len(events), len(results))
        return results

    def detect_events(self, events: list[SwapEvent], launch_block: int) -> list[SniperResult]:
        """Run the pipeline over already-normalized events."""
        if not events:
            return []

        # 1. Bursts of large buys
        chunked = chunk_large_buys(
            events, self._params.chunk_volume_threshold, self._params.chunk_window,
        )

        # 2. Fee / early-entry / quick-exit
        snipers = classify_snipers(chunked, events, launch_block, self._params)
        if not snipers:
            return []

        # 3. FIFO replay over each sniper's unfiltered history
        price = latest_price(events)
        by_wallet = group_by_wallet(events)
        histories = [by_wallet[wallet] for wallet in sorted(snipers)]
        ledgers = self._replay_all(histories, price)

        # 4. Rounded output records
        return assemble_results(ledgers)

    def _replay_all(self, histories: list[list[SwapEvent]], price: Decimal) -> list[LedgerResult]:
        if self._max_workers <= 1 or len(histories) <= 1:
            return [replay_wallet(history, price) for history in histories]

        # Wallets share no state; map() keeps input order
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            return list(pool.map(lambda history: replay_wallet(history, price), histories))
