"""Health check endpoints."""

import structlog
from fastapi import APIRouter, Depends

from vitrine import __version__
from vitrine.api.dependencies import get_db_pool, get_session_manager
from vitrine.api.models import HealthResponse
from vitrine.infrastructure.auth import SessionManager
from vitrine.infrastructure.database import DatabasePool

logger = structlog.get_logger()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db_pool: DatabasePool = Depends(get_db_pool),  # noqa: B008
    session_manager: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> HealthResponse:
    """Basic system health; no authentication required."""
    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        db_status = "healthy"
    except Exception as e:
        logger.warning("health_database_unreachable", error=str(e))
        db_status = "unhealthy"

    gate_status = "configured" if session_manager.configured else "unconfigured"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        database=db_status,
        gate=gate_status,
        version=__version__,
    )
