# SPDX-License-Identifier: MIT
"""Tests for the spkrepo-api command line."""

from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine, inspect

from spkrepo_api.cli import cli
from spkrepo_api.db.models import Base


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'spkrepo.db'}"


def invoke(runner: CliRunner, database_url: str, *args: str, **kwargs):
    return runner.invoke(
        cli,
        ["--database-url", database_url, *args],
        env={"SPKREPO_BCRYPT_ROUNDS": "4"},
        **kwargs,
    )


class TestDatabaseCommands:
    """db create-schema and db seed."""

    def test_create_schema(self, cli_runner: CliRunner, database_url: str, tmp_path: Path):
        result = invoke(cli_runner, database_url, "db", "create-schema")

        assert result.exit_code == 0, result.output
        assert "Schema created" in result.output
        assert (tmp_path / "spkrepo.db").exists()

    def test_drop_existing_asks_for_confirmation(self, cli_runner: CliRunner, database_url: str):
        result = invoke(
            cli_runner, database_url, "db", "create-schema", "--drop-existing", input="n\n"
        )

        assert result.exit_code == 1
        assert "Schema created" not in result.output

    def test_upgrade_matches_models(
        self, cli_runner: CliRunner, database_url: str, tmp_path: Path
    ):
        result = invoke(cli_runner, database_url, "db", "upgrade")
        assert result.exit_code == 0, result.output
        assert "Database upgraded to head" in result.output

        engine = create_engine(f"sqlite:///{tmp_path / 'spkrepo.db'}")
        try:
            inspector = inspect(engine)
            assert set(inspector.get_table_names()) == set(Base.metadata.tables) | {
                "alembic_version"
            }
            for name, table in Base.metadata.tables.items():
                columns = {c["name"] for c in inspector.get_columns(name)}
                assert columns == set(table.columns.keys()), name
        finally:
            engine.dispose()

    def test_seed_after_upgrade(self, cli_runner: CliRunner, database_url: str):
        invoke(cli_runner, database_url, "db", "upgrade")

        result = invoke(cli_runner, database_url, "db", "seed")
        assert result.exit_code == 0, result.output
        assert "language: 3 inserted" in result.output

    def test_seed_is_idempotent(self, cli_runner: CliRunner, database_url: str):
        invoke(cli_runner, database_url, "db", "create-schema")

        first = invoke(cli_runner, database_url, "db", "seed")
        assert first.exit_code == 0, first.output
        assert "role: 3 inserted" in first.output
        assert "language: 3 inserted" in first.output

        second = invoke(cli_runner, database_url, "db", "seed")
        assert second.exit_code == 0, second.output
        assert "role: 0 inserted" in second.output


class TestUserCommands:
    """user create."""

    def test_create_user_with_api_key(self, cli_runner: CliRunner, database_url: str):
        invoke(cli_runner, database_url, "db", "create-schema")
        invoke(cli_runner, database_url, "db", "seed")

        result = invoke(
            cli_runner,
            database_url,
            "user",
            "create",
            "admin",
            "admin@example.com",
            "--password",
            "secret",
            "--role",
            "admin",
            "--api-key",
        )

        assert result.exit_code == 0, result.output
        assert "User admin created" in result.output
        assert "API key: " in result.output

    def test_duplicate_user_aborts(self, cli_runner: CliRunner, database_url: str):
        invoke(cli_runner, database_url, "db", "create-schema")
        args = ["user", "create", "admin", "admin@example.com", "--password", "secret"]

        assert invoke(cli_runner, database_url, *args).exit_code == 0

        result = invoke(cli_runner, database_url, *args)
        assert result.exit_code == 1
        assert "Could not create user" in result.output

    def test_overlong_password_aborts(self, cli_runner: CliRunner, database_url: str):
        invoke(cli_runner, database_url, "db", "create-schema")

        result = invoke(
            cli_runner,
            database_url,
            "user",
            "create",
            "admin",
            "admin@example.com",
            "--password",
            "p" * 73,
        )

        assert result.exit_code == 1
        assert "at most 72 bytes" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output
