"""Database seeding script for development.

Creates the tables and populates streaming platform reference data.
Run with: python -m anihub.db.seed
"""

import asyncio
import logging

from anihub.config import settings
from anihub.db.session import async_session_factory, engine
from anihub.models import Base
from anihub.services.platform_service import PlatformService

logger = logging.getLogger(__name__)

PLATFORMS = [
    {
        "name": "crunchyroll",
        "display_name": "Crunchyroll",
        "website_url": "https://www.crunchyroll.com",
        "logo_url": "https://www.crunchyroll.com/build/assets/img/favicons/favicon-96x96.png",
    },
    {
        "name": "netflix",
        "display_name": "Netflix",
        "website_url": "https://www.netflix.com",
    },
    {
        "name": "hulu",
        "display_name": "Hulu",
        "website_url": "https://www.hulu.com",
    },
    {
        "name": "hidive",
        "display_name": "HIDIVE",
        "website_url": "https://www.hidive.com",
    },
    {
        "name": "prime_video",
        "display_name": "Prime Video",
        "website_url": "https://www.primevideo.com",
    },
]

# (anime_id, platform name, availability_status, direct url)
ANIME_PLATFORMS = [
    (5114, "crunchyroll", "available", "https://www.crunchyroll.com/series/GRGG9798R"),
    (5114, "netflix", "available", None),
    (5114, "hulu", "available", None),
    (16498, "crunchyroll", "available", "https://www.crunchyroll.com/series/GR751KNZY"),
    (16498, "hulu", "available", None),
    (16498, "prime_video", "available", None),
    (1535, "netflix", "available", None),
    (1535, "hulu", "available", None),
    (21, "crunchyroll", "available", "https://www.crunchyroll.com/series/GRMG8ZQZR"),
    (21, "netflix", "available", None),
    (52991, "crunchyroll", "available", "https://www.crunchyroll.com/series/GG5H5XQX4"),
]


async def seed(region: str = settings.DEFAULT_REGION) -> None:
    """Create tables and insert/update the platform reference data."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        service = PlatformService(session)

        platforms = {}
        for data in PLATFORMS:
            platform = await service.upsert_platform(region=region, **data)
            platforms[platform.name] = platform

        for anime_id, name, status, url in ANIME_PLATFORMS:
            await service.add_anime_platform(
                anime_id=anime_id,
                platform_id=platforms[name].id,
                availability_status=status,
                url=url,
                region=region,
            )

        await session.commit()

        coverage = await service.get_titles_by_platform_count(limit=5)

    logger.info(
        "Seeded %d platforms and %d title links for region %s",
        len(PLATFORMS), len(ANIME_PLATFORMS), region,
    )
    for anime_id, count in coverage:
        logger.info("  anime %d: %d platform(s)", anime_id, count)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        await seed()
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
