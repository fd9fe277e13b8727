"""Pytest configuration and shared fixtures."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-with-enough-length-1234"

from typing import AsyncGenerator, Dict

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from anihub.core.security import get_token_service, hash_password
from anihub.dependencies import get_db
from anihub.main import app
from anihub.models import Base, User


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database shared by every session in one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client bound to the app, with get_db pointed at the test database."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db, None)


async def _make_user(db: AsyncSession, email: str, username: str, password: str) -> User:
    user = User(email=email, username=username, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def alice(test_db: AsyncSession) -> User:
    return await _make_user(test_db, "alice@example.com", "alice", "secret1")


@pytest_asyncio.fixture
async def bob(test_db: AsyncSession) -> User:
    return await _make_user(test_db, "bob@example.com", "bob", "secret2")


def _bearer(user: User) -> Dict[str, str]:
    token = get_token_service().issue(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice_headers(alice: User) -> Dict[str, str]:
    return _bearer(alice)


@pytest.fixture
def bob_headers(bob: User) -> Dict[str, str]:
    return _bearer(bob)


@pytest.fixture
def register_user(client: httpx.AsyncClient):
    """Register through the API and return bearer headers for the new user."""

    async def _register(email: str, username: str, password: str = "secret1") -> Dict[str, str]:
        response = await client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "username": username},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
