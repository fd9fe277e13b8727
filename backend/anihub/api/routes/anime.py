"""Anime catalog pass-through endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from anihub.config import settings
from anihub.services.cache_service import CacheService, get_cache
from anihub.services.catalog_service import CatalogService, get_catalog_client

router = APIRouter()


async def get_catalog_service(cache: CacheService = Depends(get_cache)) -> CatalogService:
    return CatalogService(
        client=get_catalog_client(),
        cache=cache,
        cache_ttl=settings.CATALOG_CACHE_TTL_SECONDS,
    )


@router.get("/search")
async def search_anime(
    q: str = Query(..., min_length=1, max_length=100, description="Search text"),
    limit: int = Query(20, ge=1, le=25),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    return await catalog.search(q, limit)


@router.get("/top")
async def popular_anime(
    limit: int = Query(20, ge=1, le=25),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """Most popular titles."""
    return await catalog.top(limit)


@router.get("/{anime_id}")
async def anime_details(
    anime_id: int,
    catalog: CatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    return await catalog.get_anime(anime_id)
