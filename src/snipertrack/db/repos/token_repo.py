from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from snipertrack.db.models.token import Token


class TokenRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Token]:
        result = await self._session.execute(select(Token).order_by(Token.symbol.asc()))
        return list(result.scalars().all())

    async def get_by_symbol(self, symbol: str) -> Optional[Token]:
        """Case-insensitive symbol lookup."""
        result = await self._session.execute(
            select(Token).where(func.upper(Token.symbol) == symbol.upper())
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        symbol: str,
        name: str = "",
        block_number: Optional[int] = None,
        genesis_block: Optional[int] = None,
    ) -> Token:
        token = Token(symbol=symbol, name=name, block_number=block_number, genesis_block=genesis_block)
        self._session.add(token)
        await self._session.flush()
        return token
