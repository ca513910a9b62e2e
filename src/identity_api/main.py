"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
startup-time security objects and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from identity_api import __version__
from identity_api.core.config import Settings, get_settings
from identity_api.core.database import dispose_engine, init_engine
from identity_api.core.logging import setup_logging
from identity_api.core.security import PasswordHasher, TokenIssuer
from identity_api.lib.i18n import Locale, MessageCatalog


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine on startup, dispose on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout, echo=False)

    yield

    await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Identity API",
        description="User registration, authentication and security audit trail",
        version=__version__,
        lifespan=lifespan,
    )

    # Signing key, hash work factor and catalogs are fixed for the process lifetime
    app.state.settings = settings
    app.state.password_hasher = PasswordHasher.from_settings(settings)
    app.state.token_issuer = TokenIssuer.from_settings(settings)
    app.state.message_catalog = MessageCatalog(default_locale=Locale(settings.default_locale))

    from identity_api.api.errors import register_exception_handlers
    from identity_api.api.router import create_router, setup_middleware

    register_exception_handlers(app)
    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
