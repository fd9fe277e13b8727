"""Streaming platform reference data."""

import uuid
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from anihub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

AVAILABILITY_STATUSES = ("available", "upcoming", "expired")


class Platform(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A legal streaming service in a given region."""

    __tablename__ = "platforms"

    name: Mapped[str] = mapped_column(
        String(50), nullable=False,
        comment="Machine name, e.g. 'crunchyroll'"
    )
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    website_url: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    region: Mapped[str] = mapped_column(String(10), nullable=False, default="US")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("name", "region", name="uq_platform_name_region"),
    )

    # Relationships
    anime_links: Mapped[List["AnimePlatform"]] = relationship(
        back_populates="platform", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Platform(name='{self.name}', region='{self.region}')>"


class AnimePlatform(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Where a catalog title can be watched."""

    __tablename__ = "anime_platforms"

    anime_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    platform_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("platforms.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    availability_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="available",
        comment="available, upcoming or expired"
    )
    url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    region: Mapped[str] = mapped_column(String(10), nullable=False, default="US")

    __table_args__ = (
        UniqueConstraint("anime_id", "platform_id", "region", name="uq_anime_platform_region"),
    )

    # Relationships
    platform: Mapped["Platform"] = relationship(back_populates="anime_links")

    def __repr__(self) -> str:
        return f"<AnimePlatform(anime={self.anime_id}, platform={self.platform_id}, status={self.availability_status})>"
