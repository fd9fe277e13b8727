"""TrackerEntry model: a user's watch status for one catalog title."""

import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from anihub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from anihub.models.user import User

TRACKER_STATUSES = ("watching", "completed", "on-hold", "dropped", "plan-to-watch")


class TrackerEntry(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """At most one entry per (user, anime)."""

    __tablename__ = "tracker"

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    anime_id: Mapped[int] = mapped_column(
        Integer, nullable=False,
        comment="External catalog (MyAnimeList) ID"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False,
        comment="watching, completed, on-hold, dropped or plan-to-watch"
    )
    progress: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
        comment="Episodes watched"
    )
    rating: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True,
        comment="1-10, NULL when unrated"
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "anime_id", name="uq_tracker_user_anime"),
        CheckConstraint("progress >= 0", name="ck_tracker_progress_non_negative"),
        CheckConstraint(
            "rating IS NULL OR (rating >= 1 AND rating <= 10)",
            name="ck_tracker_rating_range",
        ),
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="tracker_entries")

    def __repr__(self) -> str:
        return f"<TrackerEntry(user={self.user_id}, anime={self.anime_id}, status={self.status})>"
