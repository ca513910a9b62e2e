"""FastAPI dependency injection for sessions, services, request context and auth.

Startup-time singletons (password hasher, token issuer, message catalog) live
on ``app.state``; per-request objects are built here.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from identity_api.core.context import RequestContext, new_request_id
from identity_api.core.database import get_session_factory
from identity_api.core.security import PasswordHasher, TokenIssuer
from identity_api.lib.i18n import MessageCatalog, select_locale
from identity_api.models.user import User
from identity_api.services.audit_service import AuditRecorder
from identity_api.services.auth_service import AuthService
from identity_api.services.credential_store import SqlAlchemyCredentialStore

bearer_scheme = HTTPBearer(auto_error=False)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_message_catalog(request: Request) -> MessageCatalog:
    return request.app.state.message_catalog


def get_audit_recorder() -> AuditRecorder:
    """Build an audit recorder bound to the shared session factory."""
    return AuditRecorder(get_session_factory())


def get_request_context(
    request: Request,
    catalog: Annotated[MessageCatalog, Depends(get_message_catalog)],
    lang: Annotated[str | None, Query(description="Response language (en, ja, zh)")] = None,
) -> RequestContext:
    """Assemble the correlation context for the current request.

    The request id and client IP are placed on ``request.state`` by
    ``RequestContextMiddleware``; they are regenerated or left empty when
    the middleware is not installed.
    """
    return RequestContext(
        request_id=getattr(request.state, "request_id", None) or new_request_id(),
        ip_address=getattr(request.state, "client_ip", None),
        user_agent=request.headers.get("user-agent"),
        locale=select_locale(lang, request.headers.get("accept-language"), catalog.default_locale),
        path=request.url.path,
    )


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_async_session)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    audit: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> AuthService:
    """Wire an AuthService for this request's session."""
    return AuthService(SqlAlchemyCredentialStore(session), hasher, token_issuer, audit)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> User:
    """Decode the bearer token and return the authenticated user.

    Args:
        credentials: The ``Authorization: Bearer`` credentials, if sent.
        session: The database session.
        token_issuer: Issuer used to validate signature, issuer and expiry.

    Returns:
        The authenticated, active User.

    Raises:
        HTTPException: If the token is missing or invalid, or the user is
            unknown or inactive.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        payload = token_issuer.decode_token(credentials.credentials)
        username: str | None = payload.get("sub")
        if username is None:
            raise credentials_exception
    except Exception as exc:
        raise credentials_exception from exc

    user = await SqlAlchemyCredentialStore(session).find_active_by_username(username)
    if user is None:
        raise credentials_exception
    return user


def require_role(*roles: str) -> Callable[..., Any]:
    """Factory that creates a dependency requiring specific user roles.

    Args:
        *roles: Allowed role names (e.g., "ADMIN", "SALES").

    Returns:
        A FastAPI dependency function that validates the user's role.
    """

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{current_user.role}' does not have access to this resource",
            )
        return current_user

    return role_checker
