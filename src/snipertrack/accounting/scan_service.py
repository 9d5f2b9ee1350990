"""SniperScanService: loads stored swaps and runs SniperEngine per token."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from snipertrack.accounting.sniper_engine import SniperEngine
from snipertrack.db.models.token import Token
from snipertrack.db.repos.swap_repo import SwapRepo
from snipertrack.db.repos.token_repo import TokenRepo
from snipertrack.detection.stats import summarize_swaps
from snipertrack.domain.models.sniper import SniperResult, TokenStats
from snipertrack.parser.swap_fields import normalize_swaps

logger = logging.getLogger(__name__)


class SniperScanService:
    """Bridge between storage and the pure detection engine."""

    def __init__(self, session: AsyncSession, engine: SniperEngine) -> None:
        self._session = session
        self._engine = engine

    async def scan_token(self, token: Token) -> list[SniperResult]:
        """Detect snipers for one token using its launch block."""
        docs = await SwapRepo(self._session).load_documents(token.id)
        return await asyncio.to_thread(self._engine.detect, docs, token.symbol, token.launch_block)

    async def token_stats(self, token: Token) -> TokenStats:
        docs = await SwapRepo(self._session).load_documents(token.id)
        return summarize_swaps(normalize_swaps(docs, token.symbol))

    async def scan_catalog(self, concurrency: int = 4) -> list[tuple[Token, list[SniperResult]]]:
        """Run every catalog token's pipeline; tokens are independent.

        At most ``concurrency`` tokens are in flight, each holding only its
        own documents. Reads share the one session and are serialized;
        detection runs in worker threads.
        """
        tokens = await TokenRepo(self._session).list_all()
        swap_repo = SwapRepo(self._session)
        semaphore = asyncio.Semaphore(max(concurrency, 1))
        read_lock = asyncio.Lock()

        async def _run(token: Token) -> tuple[Token, list[SniperResult]]:
            async with semaphore:
                async with read_lock:
                    docs = await swap_repo.load_documents(token.id)
                results = await asyncio.to_thread(
                    self._engine.detect, docs, token.symbol, token.launch_block,
                )
            return token, results

        scanned = await asyncio.gather(*(_run(token) for token in tokens))
        logger.info(
            "Catalog scan: %d tokens, %d snipers",
            len(scanned), sum(len(results) for _, results in scanned),
        )
        return list(scanned)
