"""Streaming platform Pydantic schemas."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PlatformResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    display_name: str
    website_url: str
    logo_url: Optional[str] = None
    region: str


class AnimePlatformResponse(BaseModel):
    """A platform joined with the title-specific availability."""

    id: UUID
    name: str
    display_name: str
    website_url: str
    logo_url: Optional[str] = None
    availability_status: str
    direct_url: Optional[str] = None
    region: str


class PlatformListResponse(BaseModel):
    success: bool = True
    region: str
    platforms: List[PlatformResponse]


class AnimePlatformListResponse(BaseModel):
    success: bool = True
    anime_id: int
    region: str
    platforms: List[AnimePlatformResponse]
