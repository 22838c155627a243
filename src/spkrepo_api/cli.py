# SPDX-License-Identifier: MIT
"""CLI entry point for the spkrepo-api command."""

import asyncio
from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .config import APIConfig
from .db import create_engine


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


@click.group()
@click.version_option(package_name="spkrepo-api")
@click.option(
    "--database-url",
    envvar="SPKREPO_DATABASE_URL",
    help="Database connection string (or set SPKREPO_DATABASE_URL).",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """Package repository API server and administration tool."""
    config = APIConfig.from_env()
    if database_url:
        config.database.url = database_url
    ctx.obj = config


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", default=8000, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    click.echo(f"Starting API server on {host}:{port}")
    uvicorn.run(
        "spkrepo_api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@cli.group(name="db")
def db_group() -> None:
    """Database schema and reference data commands."""


@db_group.command(name="create-schema")
@click.option("--drop-existing", is_flag=True, help="Drop existing tables before creating schema")
@click.pass_obj
def create_schema_command(config: APIConfig, drop_existing: bool) -> None:
    """Create database tables from the models."""
    from .db.seed import create_schema

    if drop_existing:
        click.confirm("This drops every table. Continue?", abort=True)

    async def run() -> None:
        engine = create_engine(config.database)
        try:
            await create_schema(engine, drop_existing=drop_existing)
        finally:
            await engine.dispose()

    asyncio.run(run())
    echo_success("Schema created")


def alembic_config(config: APIConfig):
    """Build an Alembic configuration for the bundled migrations."""
    from alembic.config import Config

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(Path(__file__).parent / "migrations"))
    # ConfigParser interpolation treats % specially
    alembic_cfg.set_main_option("sqlalchemy.url", config.database.url.replace("%", "%%"))
    return alembic_cfg


@db_group.command(name="upgrade")
@click.option("--revision", default="head", show_default=True, help="Target revision")
@click.pass_obj
def upgrade_command(config: APIConfig, revision: str) -> None:
    """Apply schema migrations up to a revision."""
    from alembic import command

    command.upgrade(alembic_config(config), revision)
    echo_success(f"Database upgraded to {revision}")


@db_group.command(name="seed")
@click.pass_obj
def seed_command(config: APIConfig) -> None:
    """Insert default roles and languages."""
    from .db.seed import seed_reference_data

    async def run() -> dict[str, int]:
        engine = create_engine(config.database)
        try:
            async with async_sessionmaker(engine, class_=AsyncSession)() as session:
                return await seed_reference_data(session)
        finally:
            await engine.dispose()

    inserted = asyncio.run(run())
    for table, count in inserted.items():
        click.echo(f"  {table}: {count} inserted")
    echo_success("Reference data seeded")


@cli.group(name="user")
def user_group() -> None:
    """User account commands."""


@user_group.command(name="create")
@click.argument("username")
@click.argument("email")
@click.password_option()
@click.option("--role", "roles", multiple=True, help="Role to attach (repeatable)")
@click.option("--api-key", "with_api_key", is_flag=True, help="Generate an API key")
@click.pass_obj
def create_user_command(
    config: APIConfig,
    username: str,
    email: str,
    password: str,
    roles: tuple[str, ...],
    with_api_key: bool,
) -> None:
    """Create a user account."""
    from .auth.passwords import generate_api_key, hash_password
    from .db.users import create_user
    from .models.user import validate_password_length

    try:
        validate_password_length(password)
    except ValueError as e:
        echo_error(f"Invalid password: {e}")
        raise click.Abort() from e

    api_key = generate_api_key() if with_api_key else None

    async def run() -> None:
        engine = create_engine(config.database)
        try:
            async with async_sessionmaker(engine, class_=AsyncSession)() as session:
                await create_user(
                    session,
                    username=username,
                    email=email,
                    password_hash=hash_password(password, config.auth.bcrypt_rounds),
                    role_names=list(roles),
                    api_key=api_key,
                )
        finally:
            await engine.dispose()

    try:
        asyncio.run(run())
    except SQLAlchemyError as e:
        echo_error(f"Could not create user: {e}")
        raise click.Abort() from e

    echo_success(f"User {username} created")
    if api_key:
        click.echo(f"API key: {api_key}")


__all__ = ["cli"]
