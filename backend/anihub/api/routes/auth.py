"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.security import TokenIdentity, TokenService, get_token_service
from anihub.dependencies import get_current_identity, get_db
from anihub.schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)
from anihub.services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user account and log it in."""
    service = AuthService(db)
    user = await service.register(
        email=body.email,
        password=body.password,
        username=body.username,
    )

    return AuthResponse(
        message="User registered successfully",
        token=tokens.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password."""
    service = AuthService(db)
    user = await service.authenticate(email=body.email, password=body.password)

    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
):
    """Current user plus tracker statistics."""
    service = AuthService(db)
    user = await service.get_profile(identity.user_id)
    stats = await service.get_stats(identity.user_id)

    return ProfileResponse(user=UserResponse.model_validate(user), stats=stats)
