"""Tracker service: per-user watch status records."""

import uuid
from typing import List, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.exceptions import ConflictError, NotFoundError
from anihub.models.base import utcnow
from anihub.models.tracker import TrackerEntry

logger = structlog.get_logger(__name__)


class TrackerService:
    """Owner-scoped CRUD for tracker entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_entries(self, user_id: uuid.UUID) -> List[TrackerEntry]:
        """All entries for a user, most recently updated first."""
        stmt = (
            select(TrackerEntry)
            .where(TrackerEntry.user_id == user_id)
            .order_by(TrackerEntry.updated_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_entry(self, user_id: uuid.UUID, anime_id: int) -> Optional[TrackerEntry]:
        stmt = select(TrackerEntry).where(
            TrackerEntry.user_id == user_id,
            TrackerEntry.anime_id == anime_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add_entry(
        self,
        user_id: uuid.UUID,
        anime_id: int,
        status: str,
        progress: int = 0,
    ) -> TrackerEntry:
        """Add a title. Raises ConflictError if the user already tracks it.

        The unique (user_id, anime_id) constraint catches a concurrent
        duplicate that passes the pre-check.
        """
        if await self.find_entry(user_id, anime_id):
            raise ConflictError("Anime is already in your tracker")

        entry = TrackerEntry(
            user_id=user_id,
            anime_id=anime_id,
            status=status,
            progress=progress,
        )
        self.db.add(entry)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Anime is already in your tracker")

        logger.info("tracker_entry_added", user_id=str(user_id), anime_id=anime_id, status=status)
        return entry

    async def update_entry(
        self,
        entry_id: uuid.UUID,
        user_id: uuid.UUID,
        status: Optional[str] = None,
        progress: Optional[int] = None,
        rating: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> TrackerEntry:
        """Apply a partial update to the caller's own entry.

        status, progress and notes are only written when given. rating is
        always written, so leaving it out clears it. updated_at is bumped even
        when nothing else changes.
        """
        entry = await self._get_owned(entry_id, user_id)

        if status is not None:
            entry.status = status
        if progress is not None:
            entry.progress = progress
        if notes is not None:
            entry.notes = notes
        entry.rating = rating
        entry.updated_at = utcnow()

        await self.db.flush()
        return entry

    async def remove_entry(self, entry_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """Delete the caller's own entry. Raises NotFoundError otherwise."""
        entry = await self._get_owned(entry_id, user_id)
        await self.db.delete(entry)
        await self.db.flush()
        logger.info("tracker_entry_removed", user_id=str(user_id), entry_id=str(entry_id))

    async def _get_owned(self, entry_id: uuid.UUID, user_id: uuid.UUID) -> TrackerEntry:
        stmt = select(TrackerEntry).where(
            TrackerEntry.id == entry_id,
            TrackerEntry.user_id == user_id,
        )
        result = await self.db.execute(stmt)
        entry = result.scalar_one_or_none()
        if not entry:
            raise NotFoundError("Tracker item")
        return entry
