"""Tests for the database engine and session management module."""

import pytest

import identity_api.core.database as db_module
from identity_api.core.database import dispose_engine, get_engine, get_session_factory, init_engine


class TestGetEngine:
    """Tests for get_engine."""

    def test_raises_when_not_initialized(self) -> None:
        original_engine = db_module._engine
        db_module._engine = None
        try:
            with pytest.raises(RuntimeError, match="Database engine not initialized"):
                get_engine()
        finally:
            db_module._engine = original_engine

    @pytest.mark.asyncio
    async def test_returns_engine_when_initialized(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert get_engine() is engine
        finally:
            await dispose_engine()


class TestGetSessionFactory:
    """Tests for get_session_factory."""

    def test_raises_when_not_initialized(self) -> None:
        original_factory = db_module._session_factory
        db_module._session_factory = None
        try:
            with pytest.raises(RuntimeError, match="Session factory not initialized"):
                get_session_factory()
        finally:
            db_module._session_factory = original_factory


class TestInitEngine:
    """Tests for init_engine and dispose_engine."""

    @pytest.mark.asyncio
    async def test_creates_engine_and_factory(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:", pool_timeout=5.0)
        try:
            assert engine is not None
            factory = get_session_factory()
            assert factory.kw["expire_on_commit"] is False
        finally:
            await dispose_engine()

    @pytest.mark.asyncio
    async def test_dispose_clears_state(self) -> None:
        init_engine("sqlite+aiosqlite:///:memory:")
        await dispose_engine()
        assert db_module._engine is None
        assert db_module._session_factory is None

    @pytest.mark.asyncio
    async def test_dispose_without_engine_is_noop(self) -> None:
        await dispose_engine()
        await dispose_engine()
