import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from snipertrack.api.deps import get_settings
from snipertrack.api.snipers import router as snipers_router
from snipertrack.api.tokens import router as tokens_router
from snipertrack.config import Settings, settings
from snipertrack.container import Container

logger = logging.getLogger("snipertrack.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    cfg = container.settings()
    logger.info(
        "%s %s starting: db=%s:%s/%s, ledger_workers=%d, scan_concurrency=%d",
        cfg.app_name, cfg.app_version, cfg.db_host, cfg.db_port, cfg.db_name,
        cfg.ledger_workers, cfg.scan_concurrency,
    )
    yield
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tokens_router)
app.include_router(snipers_router)


@app.get("/api/health")
async def health(cfg: Settings = Depends(get_settings)):
    """Liveness plus the detection thresholds this instance runs with."""
    params = cfg.detection_params()
    return {
        "status": "ok",
        "app": cfg.app_name,
        "version": cfg.app_version,
        "detection": {
            "chunk_volume_threshold": str(params.chunk_volume_threshold),
            "chunk_window_minutes": cfg.chunk_window_minutes,
            "fee_threshold": str(params.fee_threshold),
            "launch_grace_blocks": params.launch_grace_blocks,
            "quick_exit_minutes": cfg.quick_exit_minutes,
        },
    }
