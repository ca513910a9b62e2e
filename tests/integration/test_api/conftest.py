"""Fixtures wiring a full application to a temporary SQLite database."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_api.core.config import Settings
from identity_api.core.database import dispose_engine, get_session_factory, init_engine
from identity_api.main import create_app
from identity_api.models.base import Base


@pytest.fixture
async def app(settings: Settings, database_url: str) -> AsyncGenerator[FastAPI]:
    """Application bound to a fresh database.

    ASGITransport does not run the lifespan, so the engine is set up here.
    """
    engine = init_engine(database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_app(settings.model_copy(update={"database_url": database_url}))

    await dispose_engine()


@pytest.fixture
def db_sessions(app: FastAPI) -> async_sessionmaker[AsyncSession]:
    return get_session_factory()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
