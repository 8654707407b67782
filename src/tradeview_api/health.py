from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from tradeview import __version__
from tradeview.exceptions import TradeviewError
from tradeview.infrastructure.database import IDatabaseAdapter
from tradeview.infrastructure.observability import get_api_logger

from .deps import get_database

logger = get_api_logger("health")

router = APIRouter()


async def check_database(db: IDatabaseAdapter) -> bool:
    """Check database connectivity."""
    try:
        await db.fetch_one("SELECT 1")
        return True
    except TradeviewError as e:
        logger.error("database_health_check_failed", error=str(e))
        return False


@router.get("/health")
async def health_check(db: IDatabaseAdapter = Depends(get_database)) -> dict[str, Any]:
    """Comprehensive health check endpoint."""
    health_status = {
        "status": "healthy",
        "services": {
            "database": await check_database(db),
        },
        "version": __version__,
    }

    if not all(health_status["services"].values()):
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status


@router.get("/ready")
async def readiness_check() -> dict[str, Any]:
    """Readiness check for Kubernetes."""
    return {"status": "ready"}
