"""Discussion, vote and comment API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.security import TokenIdentity
from anihub.dependencies import get_current_identity, get_db, get_optional_identity
from anihub.schemas.common import MessageResponse
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
from anihub.services.comment_service import CommentService
from anihub.services.discussion_service import DiscussionService

router = APIRouter()


@router.get("", response_model=DiscussionListResponse)
async def list_discussions(db: AsyncSession = Depends(get_db)):
    """All discussions, newest first."""
    service = DiscussionService(db)
    discussions = await service.get_all()

    return DiscussionListResponse(
        discussions=[DiscussionResponse.model_validate(d) for d in discussions]
    )


@router.post("", response_model=DiscussionEnvelope, status_code=201)
async def create_discussion(
    body: DiscussionCreateRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = DiscussionService(db)
    discussion = await service.create_discussion(
        user_id=identity.user_id,
        title=body.title,
        content=body.content,
        anime_id=body.anime_id,
    )

    return DiscussionEnvelope(
        message="Discussion created successfully",
        discussion=DiscussionDetail.model_validate(discussion),
    )


@router.get("/{discussion_id}", response_model=DiscussionEnvelope)
async def get_discussion(
    discussion_id: UUID,
    identity: Optional[TokenIdentity] = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_db),
):
    """One discussion; includes the caller's vote when authenticated."""
    service = DiscussionService(db)
    discussion = await service.get_by_id(discussion_id)

    detail = DiscussionDetail.model_validate(discussion)
    if identity is not None:
        detail.user_vote = await service.get_user_vote(discussion_id, identity.user_id)

    return DiscussionEnvelope(discussion=detail)


@router.post("/{discussion_id}/vote", response_model=VoteResponse)
async def vote_on_discussion(
    discussion_id: UUID,
    body: VoteRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Vote agree or disagree.

    Voting the same type again toggles the vote off.
    Voting the opposite type switches the vote.
    """
    service = DiscussionService(db)
    result = await service.vote(discussion_id, identity.user_id, body.vote_type)

    detail = DiscussionDetail.model_validate(result.discussion)
    detail.user_vote = result.user_vote

    return VoteResponse(
        message=f"Vote {result.action} successfully",
        action=result.action,
        discussion=detail,
    )


@router.get("/{discussion_id}/comments", response_model=CommentListResponse)
async def list_comments(discussion_id: UUID, db: AsyncSession = Depends(get_db)):
    service = CommentService(db)
    comments = await service.get_comments(discussion_id)

    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments]
    )


@router.post("/{discussion_id}/comments", response_model=CommentEnvelope, status_code=201)
async def create_comment(
    discussion_id: UUID,
    body: CommentCreateRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = CommentService(db)
    comment = await service.create_comment(
        discussion_id=discussion_id,
        user_id=identity.user_id,
        content=body.content,
    )

    return CommentEnvelope(
        message="Comment added successfully",
        comment=CommentResponse.model_validate(comment),
    )


@router.delete("/{discussion_id}/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    discussion_id: UUID,
    comment_id: UUID,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Delete a comment. Only the author can delete (403 otherwise)."""
    service = CommentService(db)
    await service.delete_comment(discussion_id, comment_id, identity.user_id)
    return MessageResponse(message="Comment deleted successfully")
