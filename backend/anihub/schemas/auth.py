"""Auth Pydantic schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """User registration request."""
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    username: str = Field(min_length=3, max_length=20)


class LoginRequest(BaseModel):
    """User login request."""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    """Public user info. Never includes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    username: str
    created_at: datetime


class AuthResponse(BaseModel):
    """Token plus the user it was minted for."""
    success: bool = True
    message: str
    token: str
    user: UserResponse


class ProfileStats(BaseModel):
    """Tracker aggregates, recomputed on every request."""
    total_anime: int = 0
    watching: int = 0
    completed: int = 0
    on_hold: int = 0
    dropped: int = 0
    plan_to_watch: int = 0
    mean_score: float = 0.0


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserResponse
    stats: ProfileStats
