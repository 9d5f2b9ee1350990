"""Snipers API: per-token detection, xlsx export, and catalog-wide scan."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snipertrack.accounting.scan_service import SniperScanService
from snipertrack.accounting.sniper_engine import SniperEngine
from snipertrack.api.deps import get_db, get_settings, get_sniper_engine, resolve_token
from snipertrack.api.schemas.snipers import GlobalSniperResponse, SniperResponse
from snipertrack.config import Settings
from snipertrack.db.models.token import Token
from snipertrack.report.excel_writer import SniperReportWriter

router = APIRouter(prefix="/api", tags=["snipers"])

DbDep = Annotated[AsyncSession, Depends(get_db)]
EngineDep = Annotated[SniperEngine, Depends(get_sniper_engine)]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/tokens/{symbol}/snipers", response_model=list[SniperResponse])
async def get_token_snipers(
    db: DbDep,
    engine: EngineDep,
    token: Token = Depends(resolve_token),
) -> list[SniperResponse]:
    """Sniper wallets for one token with FIFO PnL. Unsorted."""
    results = await SniperScanService(db, engine).scan_token(token)
    return [SniperResponse.model_validate(r) for r in results]


@router.get("/tokens/{symbol}/snipers/export")
async def export_token_snipers(
    db: DbDep,
    engine: EngineDep,
    token: Token = Depends(resolve_token),
) -> StreamingResponse:
    """Download the token's sniper results as an .xlsx workbook."""
    results = await SniperScanService(db, engine).scan_token(token)
    buf = SniperReportWriter().write_to_buffer(token.symbol, results, engine.params, token.launch_block)
    filename = f"snipers_{token.symbol.upper()}.xlsx"
    return StreamingResponse(
        buf,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/global-snipers", response_model=list[GlobalSniperResponse])
async def get_global_snipers(
    db: DbDep,
    engine: EngineDep,
    settings: Settings = Depends(get_settings),
) -> list[GlobalSniperResponse]:
    """Snipers of every tracked token, each tagged with its token. Not netted across tokens."""
    scanned = await SniperScanService(db, engine).scan_catalog(concurrency=settings.scan_concurrency)
    return [
        GlobalSniperResponse(**r.model_dump(), token=token.symbol, token_name=token.name)
        for token, results in scanned
        for r in results
    ]
