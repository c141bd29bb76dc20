"""Pytest configuration and fixtures."""

import os

# Settings are read at import time, so the environment is fixed up first
os.environ["APP_ENV"] = "test"
os.environ["APP_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-validation"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_URL"] = ""
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["LOGOUT_REDIRECT_URL"] = "https://example.com/goodbye"

import time  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from googlelogin.auth import oauth  # noqa: E402
from googlelogin.auth.models import GoogleUser  # noqa: E402
from googlelogin.db.database import get_db  # noqa: E402
from googlelogin.main import app  # noqa: E402
from googlelogin.models.base import Base  # noqa: E402
from googlelogin.models.user import User  # noqa: E402
from googlelogin.services.google import get_profile_service  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
)

test_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class FakeProfileService:
    """Stands in for GoogleProfileService so no request reaches Google."""

    def __init__(self, profile: GoogleUser | None = None, error: Exception | None = None) -> None:
        self.profile = profile
        self.error = error
        self.calls: list[str] = []
        self.revoked: list[str] = []
        self.forgotten: list[str] = []
        self.revoke_result = True

    async def get_profile(self, access_token: str) -> GoogleUser | None:
        self.calls.append(access_token)
        if self.error is not None:
            raise self.error
        return self.profile

    async def forget_profile(self, access_token: str) -> None:
        self.forgotten.append(access_token)

    async def revoke_token(self, token: str) -> bool:
        self.revoked.append(token)
        return self.revoke_result


def make_oauth_token(**overrides) -> dict:
    """Token dict shaped like the one Authlib returns from Google."""
    token = {
        "access_token": "ya29.test-access-token",
        "token_type": "Bearer",
        "expires_in": 3599,
        "expires_at": int(time.time()) + 3599,
        "refresh_token": "1//test-refresh-token",
        "scope": "https://www.googleapis.com/auth/userinfo.email "
        "https://www.googleapis.com/auth/userinfo.profile",
    }
    token.update(overrides)
    return token


@pytest.fixture
def google_profile() -> GoogleUser:
    return GoogleUser(
        id="109876543210",
        email="ada@example.com",
        verified_email=True,
        name="Ada Lovelace",
        given_name="Ada",
        family_name="Lovelace",
        picture="https://lh3.googleusercontent.com/a/ada",
    )


@pytest.fixture
def profile_service(google_profile: GoogleUser) -> FakeProfileService:
    return FakeProfileService(profile=google_profile)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, profile_service: FakeProfileService
) -> AsyncGenerator[AsyncClient, None]:
    """Create an unauthenticated test client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_profile_service] = lambda: profile_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _sign_in(client: AsyncClient, **token_overrides):
    """Run the OAuth callback with Authlib's token exchange mocked out."""
    exchange = AsyncMock(return_value=make_oauth_token(**token_overrides))
    with patch.object(oauth.google, "authorize_access_token", exchange):
        return await client.get(
            "/api/auth/google/callback",
            params={"code": "4/test-code", "state": "test-state"},
            follow_redirects=False,
        )


@pytest.fixture
def sign_in():
    """Callable that signs a client in through the mocked callback."""
    return _sign_in


@pytest_asyncio.fixture
async def signed_in_client(client: AsyncClient) -> AsyncClient:
    """Client whose session went through a successful Google callback."""
    response = await _sign_in(client)
    assert response.status_code == 302
    return client


@pytest_asyncio.fixture
async def existing_user(db_session: AsyncSession) -> User:
    """A user row created before the Google account was linked."""
    user = User(
        google_id="legacy-id",
        email="ada@example.com",
        display_name="ada",
        login_count=3,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user
