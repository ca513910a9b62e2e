"""Typer CLI root application with serve command."""

import typer

from identity_api.core.config import get_settings
from identity_api.core.logging import setup_logging

app = typer.Typer(name="identity-api", help="Identity service: users, credentials and audit trail")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "identity_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from identity_api.cli.audit_cmd import audit_app
    from identity_api.cli.db_cmd import db_app
    from identity_api.cli.user_cmd import user_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(user_app, name="user", help="User management commands")
    app.add_typer(audit_app, name="audit", help="Audit trail commands")


_register_subcommands()
