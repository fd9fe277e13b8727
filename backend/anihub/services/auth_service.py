"""Authentication service: registration, login, profile statistics."""

import uuid
from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from anihub.core.security import hash_password, verify_password
from anihub.models.tracker import TrackerEntry
from anihub.models.user import User
from anihub.schemas.auth import ProfileStats

logger = structlog.get_logger(__name__)


class AuthService:
    """Handles user registration, login, and profile lookups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, email: str, password: str, username: str) -> User:
        """Create a user. Raises ConflictError if email or username is taken."""
        if await self._exists(User.email == email):
            raise ConflictError("Email already registered")

        if await self._exists(User.username == username):
            raise ConflictError("Username already taken")

        user = User(
            email=email,
            username=username,
            password_hash=hash_password(password),
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Email or username already taken")

        logger.info("user_registered", user_id=str(user.id), username=username)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user for valid credentials, else InvalidCredentialsError.

        Unknown email and wrong password fail identically.
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("user_logged_in", user_id=str(user.id))
        return user

    async def get_profile(self, user_id: uuid.UUID) -> User:
        """Re-read a user row by id."""
        user = await self.db.get(User, user_id)
        if not user:
            raise NotFoundError("User")
        return user

    async def get_stats(self, user_id: uuid.UUID) -> ProfileStats:
        """Tracker counts per status and mean of non-zero ratings."""
        counts_stmt = (
            select(TrackerEntry.status, func.count())
            .where(TrackerEntry.user_id == user_id)
            .group_by(TrackerEntry.status)
        )
        counts = {status: count for status, count in (await self.db.execute(counts_stmt)).all()}

        mean_stmt = select(func.avg(TrackerEntry.rating)).where(
            TrackerEntry.user_id == user_id,
            TrackerEntry.rating > 0,
        )
        mean = (await self.db.execute(mean_stmt)).scalar()

        return ProfileStats(
            total_anime=sum(counts.values()),
            watching=counts.get("watching", 0),
            completed=counts.get("completed", 0),
            on_hold=counts.get("on-hold", 0),
            dropped=counts.get("dropped", 0),
            plan_to_watch=counts.get("plan-to-watch", 0),
            mean_score=_round_score(mean),
        )

    async def _exists(self, clause) -> bool:
        stmt = select(select(User.id).where(clause).exists())
        return bool((await self.db.execute(stmt)).scalar())


def _round_score(mean) -> float:
    """One decimal place, halves rounded up (7.25 -> 7.3)."""
    if mean is None:
        return 0.0
    return float(Decimal(str(mean)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
