"""Comment service for discussion threads."""

import uuid
from typing import List

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from anihub.core.exceptions import ForbiddenError, NotFoundError
from anihub.models.discussion import Discussion, DiscussionComment

logger = structlog.get_logger(__name__)


class CommentService:
    """Append, list and author-only delete of flat comments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_comments(self, discussion_id: uuid.UUID) -> List[DiscussionComment]:
        """Comments on a discussion, oldest first. Raises NotFoundError."""
        await self._ensure_discussion(discussion_id)

        stmt = (
            select(DiscussionComment)
            .options(selectinload(DiscussionComment.user))
            .where(DiscussionComment.discussion_id == discussion_id)
            .order_by(DiscussionComment.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_comment(
        self,
        discussion_id: uuid.UUID,
        user_id: uuid.UUID,
        content: str,
    ) -> DiscussionComment:
        await self._ensure_discussion(discussion_id)

        comment = DiscussionComment(
            discussion_id=discussion_id,
            user_id=user_id,
            content=content,
        )
        self.db.add(comment)
        await self.db.flush()

        # Reload with user relationship
        await self.db.refresh(comment, ["user"])
        logger.info("comment_created", comment_id=str(comment.id), discussion_id=str(discussion_id))
        return comment

    async def delete_comment(
        self,
        discussion_id: uuid.UUID,
        comment_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> None:
        """Delete a comment. Only its author may do so."""
        comment = await self.db.get(DiscussionComment, comment_id)
        if not comment or comment.discussion_id != discussion_id:
            raise NotFoundError("Comment")

        if comment.user_id != user_id:
            raise ForbiddenError("You can only delete your own comments")

        await self.db.delete(comment)
        await self.db.flush()
        logger.info("comment_deleted", comment_id=str(comment_id), user_id=str(user_id))

    async def _ensure_discussion(self, discussion_id: uuid.UUID) -> None:
        stmt = select(Discussion.id).where(Discussion.id == discussion_id)
        if (await self.db.execute(stmt)).scalar_one_or_none() is None:
            raise NotFoundError("Discussion")
