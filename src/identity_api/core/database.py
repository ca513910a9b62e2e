"""Async database engine and session management.

Holds the process-wide engine and session factory.  Request handlers get a
session per request; the audit recorder opens its own short-lived sessions
from the same factory so audit rows commit independently of the request's
transaction.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the current async engine.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _engine is None:
        msg = "Database engine not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the current session factory.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def init_engine(database_url: str, *, pool_timeout: float | None = None, **kwargs: object) -> AsyncEngine:
    """Create and store the async engine and session factory.

    Args:
        database_url: Async SQLAlchemy connection string.
        pool_timeout: Seconds to wait for a pooled connection.  Ignored for
            SQLite, which does not use a queue pool.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        The created async engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    if "sqlite" not in database_url:
        kwargs.setdefault("pool_size", 10)
        kwargs.setdefault("max_overflow", 5)
        if pool_timeout is not None:
            kwargs.setdefault("pool_timeout", pool_timeout)
    _engine = create_async_engine(database_url, **kwargs)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Dispose of the async engine and release connections."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
