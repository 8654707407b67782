import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from tradeview import __version__
from tradeview.config import ConfigState, get_config
from tradeview.infrastructure.database import (
    Database,
    DatabaseAdapter,
    IDatabaseAdapter,
)
from tradeview.infrastructure.observability import get_api_logger, setup_logging
from tradeview.queries import QueryDispatcher

from .errors import register_exception_handlers
from .health import router as health_router
from .routes import kline_router, private_trade_router

logger = get_api_logger()


def create_app(
    settings: ConfigState | None = None,
    db: IDatabaseAdapter | None = None,
) -> FastAPI:
    """Build the API around one query capability.

    Without an explicit ``db`` an asyncpg-backed adapter is created from
    ``settings.database``; its pool opens on startup and closes on shutdown.
    """
    settings = settings or get_config()
    setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)

    if db is None:
        db = DatabaseAdapter(Database(settings.database))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.connect()
        logger.info("api_started", env=settings.env)
        try:
            yield
        finally:
            await db.disconnect()
            logger.info("api_stopped")

    app = FastAPI(title=settings.api.title, version=__version__, lifespan=lifespan)
    app.state.db = db
    app.state.dispatcher = QueryDispatcher(
        db, strict_numeric=settings.api.strict_numeric
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    register_exception_handlers(app)

    app.include_router(health_router, prefix="")  # /health directly
    app.include_router(kline_router, prefix="/api", tags=["kline"])
    app.include_router(private_trade_router, prefix="/api", tags=["private-trade"])

    @app.get("/")
    async def root():
        return {"message": "Tradeview API is running"}

    return app
