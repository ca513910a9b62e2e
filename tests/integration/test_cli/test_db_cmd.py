"""Integration tests for the `identity-api db` migration commands."""

from pathlib import Path

from sqlalchemy import Engine, inspect
from typer.testing import CliRunner

from identity_api.cli.app import app

runner = CliRunner()

ALEMBIC_INI = str(Path(__file__).resolve().parents[3] / "alembic.ini")


class TestMigrations:
    def test_upgrade_and_downgrade(self, cli_env: None, sync_engine: Engine) -> None:
        result = runner.invoke(app, ["db", "upgrade", "head", "--config", ALEMBIC_INI])
        assert result.exit_code == 0, result.output

        tables = set(inspect(sync_engine).get_table_names())
        assert {"users", "audit_logs"} <= tables

        result = runner.invoke(app, ["db", "downgrade", "base", "--config", ALEMBIC_INI])
        assert result.exit_code == 0, result.output

        sync_engine.dispose()
        tables = set(inspect(sync_engine).get_table_names())
        assert "users" not in tables
        assert "audit_logs" not in tables

    def test_migrated_schema_accepts_users(self, cli_env: None) -> None:
        runner.invoke(app, ["db", "upgrade", "head", "--config", ALEMBIC_INI])

        result = runner.invoke(
            app,
            ["user", "create", "--username", "alice", "--email", "a@example.com", "--password", "Secret123"],
            input="USER\n",
        )

        assert result.exit_code == 0, result.output
