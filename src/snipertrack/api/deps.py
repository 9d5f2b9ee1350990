from typing import AsyncGenerator

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snipertrack.accounting.sniper_engine import SniperEngine
from snipertrack.config import Settings
from snipertrack.container import Container
from snipertrack.db.models.token import Token
from snipertrack.db.repos.token_repo import TokenRepo


@inject
async def get_db(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_sniper_engine(engine: SniperEngine = Depends(Provide[Container.sniper_engine])) -> SniperEngine:
    return engine


async def resolve_token(
    symbol: str = Path(..., description="Token symbol (case-insensitive)"),
    db: AsyncSession = Depends(get_db),
) -> Token:
    token = await TokenRepo(db).get_by_symbol(symbol)
    if token is None:
        raise HTTPException(status_code=404, detail="Token not found")
    return token
