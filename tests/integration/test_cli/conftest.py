"""Fixtures pointing the CLI at a temporary SQLite database."""

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import Engine, create_engine

from identity_api.models.base import Base


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "cli.db"


@pytest.fixture
def cli_env(monkeypatch: pytest.MonkeyPatch, db_path: Path) -> None:
    """Environment consumed by ``get_settings()`` inside the CLI."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-secret-key-not-for-production-0123456789")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def sync_engine(db_path: Path) -> Generator[Engine]:
    """Synchronous engine on the same file for setup and assertions."""
    engine = create_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


@pytest.fixture
def schema(cli_env: None, sync_engine: Engine) -> None:
    Base.metadata.create_all(sync_engine)
