import json
import logging
import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snipertrack.db.models.swap import SwapRecord
from snipertrack.parser.swap_fields import get_field, normalize_address

logger = logging.getLogger(__name__)


def _optional_int(doc: dict, field: str) -> int | None:
    if doc.get(field) in (None, ""):
        return None
    return int(get_field(doc, field))


class SwapRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_existing_hashes(self, token_id: uuid.UUID) -> set[str]:
        result = await self._session.execute(
            select(SwapRecord.tx_hash).where(SwapRecord.token_id == token_id)
        )
        return set(result.scalars().all())

    async def bulk_insert(self, records: list[SwapRecord]) -> None:
        self._session.add_all(records)
        await self._session.flush()

    async def import_documents(self, token_id: uuid.UUID, docs: list[dict[str, Any]]) -> int:
        """Store raw swap documents, skipping ones without txHash or already stored.

        Returns the number of new records.
        """
        existing = await self.get_existing_hashes(token_id)
        new_records: list[SwapRecord] = []

        for doc in docs:
            tx_hash = str(doc.get("txHash") or "")
            if not tx_hash:
                logger.warning("Skipping swap document without txHash for token %s", token_id)
                continue
            if tx_hash in existing:
                continue
            existing.add(tx_hash)
            new_records.append(SwapRecord(
                token_id=token_id,
                tx_hash=tx_hash,
                block_number=_optional_int(doc, "blockNumber"),
                timestamp=_optional_int(doc, "timestamp"),
                swap_type=str(doc.get("swapType") or "") or None,
                maker=normalize_address(doc.get("maker") or doc.get("from")) or None,
                data=json.dumps(doc, default=str),
            ))

        if new_records:
            await self.bulk_insert(new_records)
            logger.info("Imported %d new swaps for token %s", len(new_records), token_id)
        return len(new_records)

    async def load_documents(self, token_id: uuid.UUID) -> list[dict[str, Any]]:
        """Every raw swap document for a token, in no particular order."""
        result = await self._session.execute(
            select(SwapRecord.data).where(SwapRecord.token_id == token_id)
        )
        return [json.loads(data) for data in result.scalars().all()]

    async def list_for_token(
        self,
        token_id: uuid.UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """Raw documents newest first, with the total count."""
        count_q = select(func.count()).select_from(SwapRecord).where(SwapRecord.token_id == token_id)
        total_result = await self._session.execute(count_q)
        total = total_result.scalar_one()

        result = await self._session.execute(
            select(SwapRecord.data)
            .where(SwapRecord.token_id == token_id)
            .order_by(SwapRecord.timestamp.desc().nullslast(), SwapRecord.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [json.loads(data) for data in result.scalars().all()], total
