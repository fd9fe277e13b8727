"""Legal streaming platform endpoints (public)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.config import settings
from anihub.dependencies import get_db
from anihub.schemas.platform import (
    AnimePlatformListResponse,
    AnimePlatformResponse,
    PlatformListResponse,
    PlatformResponse,
)
from anihub.services.platform_service import PlatformService

router = APIRouter()


@router.get("", response_model=PlatformListResponse)
async def list_platforms(
    region: Optional[str] = Query(None, max_length=10, description="Region code, e.g. US"),
    db: AsyncSession = Depends(get_db),
):
    region = region or settings.DEFAULT_REGION
    service = PlatformService(db)
    platforms = await service.get_all_platforms(region)

    return PlatformListResponse(
        region=region,
        platforms=[PlatformResponse.model_validate(p) for p in platforms],
    )


@router.get("/{anime_id}", response_model=AnimePlatformListResponse)
async def list_platforms_for_anime(
    anime_id: int,
    region: Optional[str] = Query(None, max_length=10, description="Region code, e.g. US"),
    db: AsyncSession = Depends(get_db),
):
    """Where a catalog title can be watched legally."""
    region = region or settings.DEFAULT_REGION
    service = PlatformService(db)
    rows = await service.get_platforms_for_anime(anime_id, region)

    return AnimePlatformListResponse(
        anime_id=anime_id,
        region=region,
        platforms=[AnimePlatformResponse(**row) for row in rows],
    )
