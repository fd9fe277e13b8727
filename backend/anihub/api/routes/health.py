"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.dependencies import get_db
from anihub.schemas.health import HealthCheckResponse
from anihub.services.cache_service import CacheService, get_cache

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    cache: CacheService = Depends(get_cache),
):
    """Report database and Redis connectivity.

    Redis only backs the catalog cache, so a Redis failure marks the service
    degraded rather than down.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception as e:
        db_status = f"error: {str(e)}"

    redis_status = "ok" if await cache.health_check() else "error: ping failed"

    if db_status != "ok":
        overall = "error"
    elif redis_status != "ok":
        overall = "degraded"
    else:
        overall = "ok"

    return HealthCheckResponse(
        status=overall,
        message="AniHub API is running",
        timestamp=datetime.now(timezone.utc),
        database=db_status,
        redis=redis_status,
    )
