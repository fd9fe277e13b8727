"""Pydantic schemas for the AniHub API.

All request/response models are defined here for easy import.
"""

from anihub.schemas.common import ErrorResponse, MessageResponse
from anihub.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    ProfileStats,
    RegisterRequest,
    UserResponse,
)
from anihub.schemas.tracker import (
    TrackerCreateRequest,
    TrackerEntryEnvelope,
    TrackerEntryResponse,
    TrackerListResponse,
    TrackerUpdateRequest,
)
from anihub.schemas.discussion import (
    CommentCreateRequest,
    CommentEnvelope,
    CommentListResponse,
    CommentResponse,
    DiscussionCreateRequest,
    DiscussionDetail,
    DiscussionEnvelope,
    DiscussionListResponse,
    DiscussionResponse,
    VoteRequest,
    VoteResponse,
)
from anihub.schemas.platform import (
    AnimePlatformListResponse,
    AnimePlatformResponse,
    PlatformListResponse,
    PlatformResponse,
)
from anihub.schemas.health import HealthCheckResponse

__all__ = [
    # Common
    "ErrorResponse",
    "MessageResponse",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileStats",
    "ProfileResponse",
    # Tracker
    "TrackerCreateRequest",
    "TrackerUpdateRequest",
    "TrackerEntryResponse",
    "TrackerListResponse",
    "TrackerEntryEnvelope",
    # Discussion
    "DiscussionCreateRequest",
    "VoteRequest",
    "DiscussionResponse",
    "DiscussionDetail",
    "DiscussionListResponse",
    "DiscussionEnvelope",
    "VoteResponse",
    "CommentCreateRequest",
    "CommentResponse",
    "CommentListResponse",
    "CommentEnvelope",
    # Platform
    "PlatformResponse",
    "AnimePlatformResponse",
    "PlatformListResponse",
    "AnimePlatformListResponse",
    # Health
    "HealthCheckResponse",
]
