"""Streaming platform lookups and reference-data writes."""

import uuid
from typing import Any, Dict, List, Optional, Tuple

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.exceptions import ValidationError
from anihub.models.platform import AVAILABILITY_STATUSES, AnimePlatform, Platform

logger = structlog.get_logger(__name__)


class PlatformService:
    """Read side for the API, write side for seeding/admin scripts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all_platforms(self, region: str = "US") -> List[Platform]:
        """Active platforms in a region, by display name."""
        stmt = (
            select(Platform)
            .where(Platform.is_active == True, Platform.region == region)
            .order_by(Platform.display_name)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_platforms_for_anime(
        self, anime_id: int, region: str = "US"
    ) -> List[Dict[str, Any]]:
        """Active platforms carrying a title in a region."""
        stmt = (
            select(Platform, AnimePlatform)
            .join(AnimePlatform, AnimePlatform.platform_id == Platform.id)
            .where(
                AnimePlatform.anime_id == anime_id,
                AnimePlatform.region == region,
                Platform.is_active == True,
            )
            .order_by(Platform.display_name)
        )
        result = await self.db.execute(stmt)
        return [
            {
                "id": platform.id,
                "name": platform.name,
                "display_name": platform.display_name,
                "website_url": platform.website_url,
                "logo_url": platform.logo_url,
                "availability_status": link.availability_status,
                "direct_url": link.url,
                "region": link.region,
            }
            for platform, link in result.all()
        ]

    async def get_titles_by_platform_count(self, limit: int = 20) -> List[Tuple[int, int]]:
        """(anime_id, platform_count) pairs, best-covered titles first.

        Only active platforms are counted. Used to report seeding coverage.
        """
        platform_count = func.count(AnimePlatform.platform_id).label("platform_count")
        stmt = (
            select(AnimePlatform.anime_id, platform_count)
            .join(Platform, AnimePlatform.platform_id == Platform.id)
            .where(Platform.is_active == True)
            .group_by(AnimePlatform.anime_id)
            .order_by(platform_count.desc(), AnimePlatform.anime_id)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [(anime_id, count) for anime_id, count in result.all()]

    async def upsert_platform(
        self,
        name: str,
        display_name: str,
        website_url: str,
        logo_url: Optional[str] = None,
        region: str = "US",
        is_active: bool = True,
    ) -> Platform:
        """Create a platform or update the one with the same name/region."""
        stmt = select(Platform).where(Platform.name == name, Platform.region == region)
        platform = (await self.db.execute(stmt)).scalar_one_or_none()

        if platform:
            platform.display_name = display_name
            platform.website_url = website_url
            platform.logo_url = logo_url
            platform.is_active = is_active
        else:
            platform = Platform(
                name=name,
                display_name=display_name,
                website_url=website_url,
                logo_url=logo_url,
                region=region,
                is_active=is_active,
            )
            self.db.add(platform)

        await self.db.flush()
        return platform

    async def add_anime_platform(
        self,
        anime_id: int,
        platform_id: uuid.UUID,
        availability_status: str = "available",
        url: Optional[str] = None,
        region: str = "US",
    ) -> AnimePlatform:
        """Record where a title streams, updating an existing link in place."""
        if availability_status not in AVAILABILITY_STATUSES:
            raise ValidationError(
                "availability_status must be one of: " + ", ".join(AVAILABILITY_STATUSES)
            )

        stmt = select(AnimePlatform).where(
            AnimePlatform.anime_id == anime_id,
            AnimePlatform.platform_id == platform_id,
            AnimePlatform.region == region,
        )
        link = (await self.db.execute(stmt)).scalar_one_or_none()

        if link:
            link.availability_status = availability_status
            link.url = url
        else:
            link = AnimePlatform(
                anime_id=anime_id,
                platform_id=platform_id,
                availability_status=availability_status,
                url=url,
                region=region,
            )
            self.db.add(link)

        await self.db.flush()
        logger.debug("anime_platform_saved", anime_id=anime_id, platform_id=str(platform_id), region=region)
        return link
