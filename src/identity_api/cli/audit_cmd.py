"""Audit trail CLI commands."""

import asyncio
from typing import TYPE_CHECKING

import typer

if TYPE_CHECKING:
    from identity_api.models.audit_log import AuditStatus

audit_app = typer.Typer()


@audit_app.command("list")
def list_audit_logs(
    username: str | None = typer.Option(None, "--username", "-u", help="Filter by attempted username"),
    action: str | None = typer.Option(None, "--action", "-a", help="Filter by action (e.g. USER_LOGIN)"),
    status: str | None = typer.Option(None, "--status", "-s", help="Filter by status (SUCCESS/FAILURE/ERROR)"),
    limit: int = typer.Option(50, "--limit", "-n", min=1, max=1000, help="Maximum records to show"),
) -> None:
    """Show recent audit records, newest first."""
    from identity_api.models.audit_log import AuditStatus

    parsed_status = None
    if status is not None:
        try:
            parsed_status = AuditStatus(status.upper())
        except ValueError:
            typer.echo(f"Error: unknown status '{status}'", err=True)
            raise typer.Exit(code=1) from None

    asyncio.run(_list_audit_logs(username, action, parsed_status, limit))


async def _list_audit_logs(
    username: str | None,
    action: str | None,
    status: "AuditStatus | None",
    limit: int,
) -> None:
    """Async implementation of audit listing."""
    from identity_api.core.config import get_settings
    from identity_api.core.database import dispose_engine, get_session_factory, init_engine
    from identity_api.services.audit_service import query_audit_logs

    settings = get_settings()
    init_engine(settings.database_url, pool_timeout=settings.database_pool_timeout)

    try:
        factory = get_session_factory()
        async with factory() as session:
            logs, total = await query_audit_logs(
                session,
                username=username,
                action=action,
                status=status,
                page_size=limit,
            )
            typer.echo(f"{'Time':<26} {'Action':<15} {'Status':<8} {'Username':<20} {'IP':<16} Request ID")
            typer.echo("-" * 120)
            for log in logs:
                created = log.created_at.isoformat(timespec="seconds") if log.created_at else ""
                typer.echo(
                    f"{created:<26} {log.action:<15} {log.status:<8} {log.username or '':<20} "
                    f"{log.ip_address or '':<16} {log.request_id or ''}"
                )
            typer.echo(f"\nShowing {len(logs)} of {total}")
    finally:
        await dispose_engine()
