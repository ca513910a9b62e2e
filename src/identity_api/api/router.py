"""Root API router and middleware registration."""

from fastapi import APIRouter, FastAPI

from identity_api.api.middleware import RequestContextMiddleware, SecurityHeadersMiddleware, setup_cors
from identity_api.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from identity_api.api.v1.auth import router as auth_router
    from identity_api.api.v1.menu import menu_router

    root_router = APIRouter(prefix=settings.api_prefix)
    root_router.include_router(auth_router)
    root_router.include_router(menu_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    The request-context middleware is added last so it runs outermost and
    tags every response, including CORS preflights.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware, trusted_proxy_headers=settings.trusted_proxy_header_list)
