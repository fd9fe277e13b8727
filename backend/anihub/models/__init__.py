"""SQLAlchemy models for AniHub.

All models are imported here so they register with Base.metadata.
"""

from anihub.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from anihub.models.user import User
from anihub.models.tracker import TRACKER_STATUSES, TrackerEntry
from anihub.models.discussion import VOTE_TYPES, Discussion, DiscussionComment, DiscussionVote
from anihub.models.platform import AVAILABILITY_STATUSES, AnimePlatform, Platform

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "TrackerEntry",
    "TRACKER_STATUSES",
    "Discussion",
    "DiscussionVote",
    "DiscussionComment",
    "VOTE_TYPES",
    "Platform",
    "AnimePlatform",
    "AVAILABILITY_STATUSES",
]
