"""User management CLI commands."""

import asyncio

import typer

user_app = typer.Typer()

_CLI_USER_AGENT = "identity-api-cli"


@user_app.command("create")
def create_user(
    username: str = typer.Option(..., prompt=True, help="Username"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"),
    role: str = typer.Option("USER", prompt=True, help="User role (ADMIN/USER/SALES)"),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Exit successfully if user already exists (idempotent mode)",
    ),
) -> None:
    """Create a new user through the same rules as POST /auth/register."""
    asyncio.run(_create_user(username, email, password, role, if_not_exists=if_not_exists))


async def _create_user(
    username: str,
    email: str,
    password: str,
    role: str,
    *,
    if_not_exists: bool = False,
) -> None:
    """Async implementation of user creation."""
    from identity_api.core.config import get_settings
    from identity_api.core.context import RequestContext
    from identity_api.core.database import dispose_engine, get_session_factory, init_engine
    from identity_api.core.security import PasswordHasher, TokenIssuer
    from identity_api.lib.i18n import MessageCatalog
    from identity_api.lib.validation import validate_register_request
    from identity_api.schemas.auth import RegisterRequest
    from identity_api.services.audit_service import AuditRecorder
    from identity_api.services.auth_service import AuthService, DuplicateUsername
    from identity_api.services.credential_store import SqlAlchemyCredentialStore

    request = RegisterRequest(username=username, email=email, password=password, role=role.upper())
    violations = validate_register_request(request.model_dump())
    if violations:
        catalog = MessageCatalog()
        for violation in violations:
            typer.echo(f"Error: {violation.field}: {catalog.resolve(violation.message)}", err=True)
        raise typer.Exit(code=1)

    settings = get_settings()
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout)

    try:
        factory = get_session_factory()
        async with factory() as session:
            auth = AuthService(
                SqlAlchemyCredentialStore(session),
                PasswordHasher.from_settings(settings),
                TokenIssuer.from_settings(settings),
                AuditRecorder(factory),
            )
            result = await auth.register(request, RequestContext(user_agent=_CLI_USER_AGENT))
            if isinstance(result, DuplicateUsername):
                if if_not_exists:
                    typer.echo(f"User '{username}' already exists, skipping (--if-not-exists)")
                    return
                typer.echo(f"Error: user '{username}' already exists", err=True)
                raise typer.Exit(code=1)
            typer.echo(f"User '{result.username}' created with role '{result.role}' (id {result.id})")
    finally:
        await dispose_engine()


@user_app.command("list")
def list_users(
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    page_size: int = typer.Option(50, "--page-size", min=1, max=500, help="Users per page"),
) -> None:
    """List users, newest first."""
    asyncio.run(_list_users(page, page_size))


async def _list_users(page: int, page_size: int) -> None:
    """Async implementation of user listing."""
    from identity_api.core.config import get_settings
    from identity_api.core.database import dispose_engine, get_session_factory, init_engine
    from identity_api.services.credential_store import SqlAlchemyCredentialStore

    settings = get_settings()
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout)

    try:
        factory = get_session_factory()
        async with factory() as session:
            users, total = await SqlAlchemyCredentialStore(session).list_users(page=page, page_size=page_size)
            typer.echo(f"{'Username':<20} {'Email':<30} {'Role':<10} {'Active':<8}")
            typer.echo("-" * 68)
            for user in users:
                typer.echo(f"{user.username:<20} {user.email:<30} {user.role:<10} {user.is_active!s:<8}")
            typer.echo(f"\nTotal: {total}")
    finally:
        await dispose_engine()


@user_app.command("deactivate")
def deactivate_user(username: str = typer.Argument(..., help="Username to deactivate")) -> None:
    """Deactivate a user so it can no longer log in."""
    asyncio.run(_deactivate_user(username))


async def _deactivate_user(username: str) -> None:
    """Async implementation of user deactivation."""
    from identity_api.core.config import get_settings
    from identity_api.core.database import dispose_engine, get_session_factory, init_engine
    from identity_api.services.credential_store import SqlAlchemyCredentialStore

    settings = get_settings()
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout)

    try:
        factory = get_session_factory()
        async with factory() as session:
            store = SqlAlchemyCredentialStore(session)
            user = await store.find_by_username(username)
            if user is None:
                typer.echo(f"Error: user '{username}' not found", err=True)
                raise typer.Exit(code=1)
            if not user.is_active:
                typer.echo(f"User '{username}' is already inactive")
                return
            await store.deactivate(user.id)
            typer.echo(f"User '{username}' deactivated")
    finally:
        await dispose_engine()


@user_app.command("stats")
def user_stats() -> None:
    """Show user totals, active users and per-role counts."""
    asyncio.run(_user_stats())


async def _user_stats() -> None:
    """Async implementation of user statistics."""
    from identity_api.core.config import get_settings
    from identity_api.core.database import dispose_engine, get_session_factory, init_engine
    from identity_api.models.user import UserRole
    from identity_api.services.credential_store import SqlAlchemyCredentialStore

    settings = get_settings()
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout)

    try:
        factory = get_session_factory()
        async with factory() as session:
            store = SqlAlchemyCredentialStore(session)
            typer.echo(f"Total users:  {await store.count()}")
            typer.echo(f"Active users: {await store.count_active()}")
            for role in UserRole:
                typer.echo(f"  {role.value:<8} {await store.count_by_role(role)}")
    finally:
        await dispose_engine()
