"""User model for authentication and community features."""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from anihub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from anihub.models.tracker import TrackerEntry
    from anihub.models.discussion import Discussion, DiscussionComment, DiscussionVote


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Registered AniHub user.

    Created once at registration and never updated afterwards. The password
    hash never leaves the service layer.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True,
        comment="User email address (unique)"
    )
    username: Mapped[str] = mapped_column(
        String(20), unique=True, nullable=False, index=True,
        comment="Display name, 3-20 characters"
    )
    password_hash: Mapped[str] = mapped_column(
        String(128), nullable=False,
        comment="bcrypt hashed password"
    )

    # Relationships
    tracker_entries: Mapped[List["TrackerEntry"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    discussions: Mapped[List["Discussion"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    discussion_votes: Mapped[List["DiscussionVote"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    discussion_comments: Mapped[List["DiscussionComment"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
