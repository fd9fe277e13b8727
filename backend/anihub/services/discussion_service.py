"""Discussion service: posts and agree/disagree voting.

Vote transitions for one (discussion, user) pair:

    current   submitted   next      action
    none      X           X         insert vote row
    X         X           none      delete vote row (toggle off)
    X         Y           Y         update vote row's type

After every transition both counters on the discussion are recomputed from
the vote table in a single UPDATE, never adjusted in place.
"""

import uuid
from dataclasses import dataclass
from typing import List, Optional

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from anihub.core.exceptions import ConflictError, NotFoundError, ValidationError
from anihub.models.discussion import VOTE_TYPES, Discussion, DiscussionVote

logger = structlog.get_logger(__name__)


@dataclass
class VoteResult:
    """Outcome of a vote submission."""

    discussion: Discussion
    action: str  # "added", "removed" or "changed"
    user_vote: Optional[str]


class DiscussionService:
    """Handles discussions and their vote tallies."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_discussion(
        self,
        user_id: uuid.UUID,
        title: str,
        content: str,
        anime_id: Optional[int] = None,
    ) -> Discussion:
        discussion = Discussion(
            user_id=user_id,
            title=title,
            content=content,
            anime_id=anime_id,
            agree_count=0,
            disagree_count=0,
        )
        self.db.add(discussion)
        await self.db.flush()
        await self.db.refresh(discussion, ["user"])

        logger.info("discussion_created", discussion_id=str(discussion.id), user_id=str(user_id))
        return discussion

    async def get_all(self) -> List[Discussion]:
        """All discussions with their authors, newest first."""
        stmt = (
            select(Discussion)
            .options(selectinload(Discussion.user))
            .order_by(Discussion.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, discussion_id: uuid.UUID) -> Discussion:
        """Fetch one discussion with its author. Raises NotFoundError."""
        stmt = (
            select(Discussion)
            .options(selectinload(Discussion.user))
            .where(Discussion.id == discussion_id)
        )
        result = await self.db.execute(stmt)
        discussion = result.scalar_one_or_none()
        if not discussion:
            raise NotFoundError("Discussion")
        return discussion

    async def get_user_vote(
        self, discussion_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[str]:
        """The user's current vote type on a discussion, or None."""
        stmt = select(DiscussionVote.vote_type).where(
            DiscussionVote.discussion_id == discussion_id,
            DiscussionVote.user_id == user_id,
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def vote(
        self,
        discussion_id: uuid.UUID,
        user_id: uuid.UUID,
        vote_type: str,
    ) -> VoteResult:
        """Cast, switch or withdraw a vote and refresh the tallies."""
        if vote_type not in VOTE_TYPES:
            raise ValidationError('Vote type must be "agree" or "disagree"')

        discussion = await self.get_by_id(discussion_id)

        stmt = select(DiscussionVote).where(
            DiscussionVote.discussion_id == discussion_id,
            DiscussionVote.user_id == user_id,
        )
        existing = (await self.db.execute(stmt)).scalar_one_or_none()

        if existing is None:
            self.db.add(
                DiscussionVote(
                    discussion_id=discussion_id,
                    user_id=user_id,
                    vote_type=vote_type,
                )
            )
            action, user_vote = "added", vote_type
        elif existing.vote_type == vote_type:
            await self.db.delete(existing)
            action, user_vote = "removed", None
        else:
            existing.vote_type = vote_type
            action, user_vote = "changed", vote_type

        try:
            await self.db.flush()
        except (IntegrityError, StaleDataError):
            # Another request wrote this user's vote first
            await self.db.rollback()
            raise ConflictError("Vote was changed by another request, please retry")

        await self.recount_votes(discussion_id)
        await self.db.refresh(discussion, ["agree_count", "disagree_count"])

        logger.info(
            "discussion_vote",
            discussion_id=str(discussion_id),
            user_id=str(user_id),
            action=action,
            vote_type=vote_type,
            agree_count=discussion.agree_count,
            disagree_count=discussion.disagree_count,
        )
        return VoteResult(discussion=discussion, action=action, user_vote=user_vote)

    async def recount_votes(self, discussion_id: uuid.UUID) -> None:
        """Rewrite both counters from a fresh count over discussion_votes."""

        def _count(kind: str):
            return (
                select(func.count(DiscussionVote.id))
                .where(
                    DiscussionVote.discussion_id == discussion_id,
                    DiscussionVote.vote_type == kind,
                )
                .scalar_subquery()
            )

        stmt = (
            update(Discussion)
            .where(Discussion.id == discussion_id)
            .values(agree_count=_count("agree"), disagree_count=_count("disagree"))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(stmt)
