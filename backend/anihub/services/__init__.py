"""Services module for business logic and data operations."""

from anihub.services.auth_service import AuthService
from anihub.services.catalog_service import CatalogService
from anihub.services.comment_service import CommentService
from anihub.services.discussion_service import DiscussionService, VoteResult
from anihub.services.platform_service import PlatformService
from anihub.services.tracker_service import TrackerService

__all__ = [
    "AuthService",
    "CatalogService",
    "CommentService",
    "DiscussionService",
    "VoteResult",
    "PlatformService",
    "TrackerService",
]
