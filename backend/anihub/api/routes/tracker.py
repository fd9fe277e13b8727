"""Tracker API endpoints. All require authentication."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.security import TokenIdentity
from anihub.dependencies import get_current_identity, get_db
from anihub.schemas.common import MessageResponse
from anihub.schemas.tracker import (
    TrackerCreateRequest,
    TrackerEntryEnvelope,
    TrackerEntryResponse,
    TrackerListResponse,
    TrackerUpdateRequest,
)
from anihub.services.tracker_service import TrackerService

router = APIRouter()


@router.get("", response_model=TrackerListResponse)
async def list_tracker(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """The caller's tracker, most recently updated first."""
    service = TrackerService(db)
    entries = await service.list_entries(identity.user_id)

    return TrackerListResponse(
        data=[TrackerEntryResponse.model_validate(e) for e in entries]
    )


@router.post("", response_model=TrackerEntryEnvelope, status_code=201)
async def add_to_tracker(
    body: TrackerCreateRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Add a title. 409 if it is already tracked."""
    service = TrackerService(db)
    entry = await service.add_entry(
        user_id=identity.user_id,
        anime_id=body.anime_id,
        status=body.status,
        progress=body.progress,
    )

    return TrackerEntryEnvelope(
        message="Anime added to tracker",
        data=TrackerEntryResponse.model_validate(entry),
    )


@router.put("/{entry_id}", response_model=TrackerEntryEnvelope)
async def update_tracker_entry(
    entry_id: UUID,
    body: TrackerUpdateRequest,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Partially update one of the caller's entries. Omitting rating clears it."""
    service = TrackerService(db)
    entry = await service.update_entry(
        entry_id=entry_id,
        user_id=identity.user_id,
        status=body.status,
        progress=body.progress,
        rating=body.rating,
        notes=body.notes,
    )

    return TrackerEntryEnvelope(
        message="Tracker item updated",
        data=TrackerEntryResponse.model_validate(entry),
    )


@router.delete("/{entry_id}", response_model=MessageResponse)
async def remove_from_tracker(
    entry_id: UUID,
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    service = TrackerService(db)
    await service.remove_entry(entry_id, identity.user_id)
    return MessageResponse(message="Anime removed from tracker")
