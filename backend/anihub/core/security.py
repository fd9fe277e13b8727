"""Password hashing and bearer token issuing/verification."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext

from anihub.config import settings

logger = structlog.get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class TokenIdentity:
    """Caller identity as carried by a verified token."""

    user_id: uuid.UUID
    email: str


class TokenService(ABC):
    """Issues and verifies stateless bearer tokens.

    Routers only depend on this interface, so a revocation-aware or
    refresh-token implementation can be swapped in through
    ``get_token_service``.
    """

    @abstractmethod
    def issue(self, user_id: uuid.UUID, email: str) -> str:
        """Mint a token for the given user."""

    @abstractmethod
    def verify(self, token: str) -> Optional[TokenIdentity]:
        """Return the identity for a valid token, or None."""


class JWTTokenService(TokenService):
    """Signed, expiring JWTs with a ``{userId, email}`` payload."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24 * 7):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: uuid.UUID, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[TokenIdentity]:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug("token_rejected", reason=str(e))
            return None

        raw_user_id = payload.get("userId")
        email = payload.get("email")
        if not raw_user_id or not email:
            return None

        try:
            user_id = uuid.UUID(str(raw_user_id))
        except ValueError:
            return None

        return TokenIdentity(user_id=user_id, email=email)


@lru_cache
def get_token_service() -> TokenService:
    """FastAPI dependency returning the process-wide token service."""
    return JWTTokenService(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )
