"""Discussion, vote and comment models."""

import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from anihub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from anihub.models.user import User

VOTE_TYPES = ("agree", "disagree")


class Discussion(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A community post, optionally tagged with a catalog title.

    agree_count / disagree_count mirror the discussion_votes rows and are
    only ever written by the vote recount.
    """

    __tablename__ = "discussions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    anime_id: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True,
        comment="Informational catalog reference, not validated"
    )
    agree_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    disagree_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_discussions_created", "created_at"),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="discussions")
    votes: Mapped[List["DiscussionVote"]] = relationship(
        back_populates="discussion", cascade="all, delete-orphan"
    )
    comments: Mapped[List["DiscussionComment"]] = relationship(
        back_populates="discussion", cascade="all, delete-orphan"
    )

    @property
    def username(self) -> str:
        return self.user.username

    def __repr__(self) -> str:
        return f"<Discussion(id={self.id}, title='{self.title}')>"


class DiscussionVote(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One vote per user per discussion."""

    __tablename__ = "discussion_votes"

    discussion_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    vote_type: Mapped[str] = mapped_column(
        String(8), nullable=False,
        comment="'agree' or 'disagree'"
    )

    __table_args__ = (
        UniqueConstraint("discussion_id", "user_id", name="uq_discussion_user_vote"),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="discussion_votes")
    discussion: Mapped["Discussion"] = relationship(back_populates="votes")

    def __repr__(self) -> str:
        return f"<DiscussionVote(user={self.user_id}, discussion={self.discussion_id}, type={self.vote_type})>"


class DiscussionComment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A flat comment on a discussion."""

    __tablename__ = "discussion_comments"

    discussion_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_discussion_comments_discussion_created", "discussion_id", "created_at"),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="discussion_comments")
    discussion: Mapped["Discussion"] = relationship(back_populates="comments")

    @property
    def username(self) -> str:
        return self.user.username

    def __repr__(self) -> str:
        return f"<DiscussionComment(id={self.id}, discussion={self.discussion_id}, user={self.user_id})>"
