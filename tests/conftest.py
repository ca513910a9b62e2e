"""Shared test fixtures for async database, sessions, security objects and users."""

import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from identity_api.core.config import Settings
from identity_api.core.security import PasswordHasher, TokenIssuer
from identity_api.lib.i18n import MessageCatalog
from identity_api.models.base import Base
from identity_api.models.user import User

TEST_SECRET = "test-secret-key-not-for-production-0123456789"


@pytest.fixture
def settings() -> Settings:
    """Test application settings (fast bcrypt work factor)."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=TEST_SECRET,
        jwt_algorithm="HS256",
        bcrypt_rounds=4,
    )


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def catalog() -> MessageCatalog:
    return MessageCatalog()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """File-backed SQLite URL so several sessions share one database."""
    return f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async SQLite engine with all tables."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def sample_user(async_session: AsyncSession, hasher: PasswordHasher) -> User:
    """Create an active USER-role account with password ``Secret123``."""
    user = User(
        id=uuid.uuid4(),
        username="alice",
        email="alice@example.com",
        hashed_password=hasher.hash("Secret123"),
        role="USER",
        is_active=True,
    )
    async_session.add(user)
    await async_session.commit()
    await async_session.refresh(user)
    return user
