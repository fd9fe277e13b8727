"""Tracker Pydantic schemas."""

from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

TrackerStatus = Literal["watching", "completed", "on-hold", "dropped", "plan-to-watch"]


class TrackerCreateRequest(BaseModel):
    """Add a title to the caller's tracker."""
    model_config = ConfigDict(populate_by_name=True)

    anime_id: int = Field(alias="animeId", gt=0)
    status: TrackerStatus
    progress: int = Field(default=0, ge=0)


class TrackerUpdateRequest(BaseModel):
    """Partial update. Absent fields are kept, except rating which is
    always written (absent means cleared)."""
    status: Optional[TrackerStatus] = None
    progress: Optional[int] = Field(default=None, ge=0)
    rating: Optional[int] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None


class TrackerEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    anime_id: int
    status: str
    progress: int
    rating: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TrackerListResponse(BaseModel):
    success: bool = True
    data: List[TrackerEntryResponse]


class TrackerEntryEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: TrackerEntryResponse
