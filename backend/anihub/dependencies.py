"""FastAPI dependency injection providers."""

from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from anihub.core.exceptions import UnauthorizedError
from anihub.core.security import TokenIdentity, TokenService, get_token_service
from anihub.db.session import async_session_factory

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for request-scoped usage.

    The whole request runs in one transaction: committed on success, rolled
    back on any error.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    """Verify the bearer token and return the caller's identity.

    The payload is trusted as-is; no database lookup happens here.
    Raises 401 if the token is missing, malformed, expired or badly signed.
    """
    if not credentials:
        raise UnauthorizedError("Access denied. No token provided.")

    identity = tokens.verify(credentials.credentials)
    if identity is None:
        raise UnauthorizedError("Invalid or expired token.")

    return identity


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[TokenIdentity]:
    """Like get_current_identity but returns None instead of raising 401."""
    if not credentials:
        return None
    return tokens.verify(credentials.credentials)
