"""Tokens API: catalog, swap history, swap import."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from snipertrack.accounting.scan_service import SniperScanService
from snipertrack.accounting.sniper_engine import SniperEngine
from snipertrack.api.deps import get_db, get_sniper_engine, resolve_token
from snipertrack.api.schemas.tokens import (
    SwapEventResponse,
    SwapImportRequest,
    SwapImportResponse,
    SwapListResponse,
    TokenCreateRequest,
    TokenDetailResponse,
    TokenResponse,
    TokenStatsResponse,
)
from snipertrack.db.models.token import Token
from snipertrack.db.repos.swap_repo import SwapRepo
from snipertrack.db.repos.token_repo import TokenRepo
from snipertrack.parser.swap_fields import SwapFieldMap, normalize_swap

router = APIRouter(prefix="/api/tokens", tags=["tokens"])

DbDep = Annotated[AsyncSession, Depends(get_db)]


@router.get("", response_model=list[TokenResponse])
async def list_tokens(db: DbDep) -> list[TokenResponse]:
    tokens = await TokenRepo(db).list_all()
    return [TokenResponse.model_validate(t) for t in tokens]


@router.post("", response_model=TokenResponse, status_code=201)
async def create_token(body: TokenCreateRequest, db: DbDep) -> TokenResponse:
    repo = TokenRepo(db)
    if await repo.get_by_symbol(body.symbol) is not None:
        raise HTTPException(status_code=409, detail=f"Token {body.symbol} already exists")

    token = await repo.create(
        symbol=body.symbol,
        name=body.name,
        block_number=body.block_number,
        genesis_block=body.genesis_block,
    )
    await db.commit()
    return TokenResponse.model_validate(token)


@router.get("/{symbol}", response_model=TokenDetailResponse)
async def get_token(
    db: DbDep,
    token: Token = Depends(resolve_token),
    engine: SniperEngine = Depends(get_sniper_engine),
) -> TokenDetailResponse:
    """Token metadata plus headline swap statistics."""
    stats = await SniperScanService(db, engine).token_stats(token)
    return TokenDetailResponse(
        **TokenResponse.model_validate(token).model_dump(),
        stats=TokenStatsResponse(**stats.model_dump()),
    )


@router.get("/{symbol}/swaps", response_model=SwapListResponse)
async def list_swaps(
    db: DbDep,
    token: Token = Depends(resolve_token),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> SwapListResponse:
    """Swaps newest first."""
    docs, total = await SwapRepo(db).list_for_token(token.id, limit=limit, offset=offset)
    field_map = SwapFieldMap(token.symbol)

    swaps: list[SwapEventResponse] = []
    for doc in docs:
        event = normalize_swap(doc, field_map)
        if event is None:
            continue
        swaps.append(SwapEventResponse(**event.model_dump(exclude={"direction"}), direction=event.direction.value))

    return SwapListResponse(swaps=swaps, total=total, limit=limit, offset=offset)


@router.post("/{symbol}/swaps", response_model=SwapImportResponse)
async def import_swaps(
    body: SwapImportRequest,
    db: DbDep,
    token: Token = Depends(resolve_token),
) -> SwapImportResponse:
    """Store raw swap documents for a token. Documents already stored (by txHash) are skipped."""
    imported = await SwapRepo(db).import_documents(token.id, body.swaps)
    await db.commit()
    return SwapImportResponse(received=len(body.swaps), imported=imported)
