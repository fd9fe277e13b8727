"""Discussion and comment Pydantic schemas."""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

VoteType = Literal["agree", "disagree"]


class DiscussionCreateRequest(BaseModel):
    """Request to open a new discussion."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    anime_id: Optional[int] = Field(default=None, alias="animeId")


class VoteRequest(BaseModel):
    """Agree/disagree vote. Repeating the same type removes the vote."""
    model_config = ConfigDict(populate_by_name=True)

    vote_type: VoteType = Field(alias="voteType")


class DiscussionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    anime_id: Optional[int] = None
    agree_count: int
    disagree_count: int
    created_at: datetime
    user_id: UUID
    username: str


class DiscussionDetail(DiscussionResponse):
    user_vote: Optional[VoteType] = None


class DiscussionListResponse(BaseModel):
    success: bool = True
    discussions: List[DiscussionResponse]


class DiscussionEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    discussion: DiscussionDetail


class VoteResponse(BaseModel):
    success: bool = True
    message: str
    action: Literal["added", "removed", "changed"]
    discussion: DiscussionDetail


class CommentCreateRequest(BaseModel):
    """Request to create a new comment."""
    content: str = Field(min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required")
        return v


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    discussion_id: UUID
    user_id: UUID
    username: str
    content: str
    created_at: datetime
    updated_at: datetime


class CommentListResponse(BaseModel):
    success: bool = True
    comments: List[CommentResponse]


class CommentEnvelope(BaseModel):
    success: bool = True
    message: str
    comment: CommentResponse
