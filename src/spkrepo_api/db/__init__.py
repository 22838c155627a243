# SPDX-License-Identifier: MIT
"""Database module for the package repository."""

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from ..config import DatabaseConfig

__all__ = [
    "async_url",
    "create_engine",
    "enable_sqlite_foreign_keys",
    "init_db",
    "close_db",
    "get_session",
]

# Database engine and session will be initialized at startup
_engine = None
_session_factory = None


def async_url(url: str) -> str:
    """Convert a sync database URL to its async driver equivalent."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


def enable_sqlite_foreign_keys(engine) -> None:
    """Enforce foreign keys and their ON DELETE actions on SQLite connections.

    SQLite ignores them unless the pragma is set on every new connection.
    """
    from sqlalchemy import event

    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(config: "DatabaseConfig"):
    """Create the async engine and its connection pool."""
    from sqlalchemy.ext.asyncio import create_async_engine

    url = async_url(config.url)
    if ":memory:" in url:
        # In-memory SQLite lives on a single shared connection
        engine = create_async_engine(url, echo=config.echo)
    else:
        engine = create_async_engine(
            url,
            echo=config.echo,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )
    enable_sqlite_foreign_keys(engine)
    return engine


async def init_db(config: "DatabaseConfig", create_tables: bool = True) -> None:
    """Initialize database connection.

    Args:
        config: Database configuration
        create_tables: Create missing tables on startup
    """
    global _engine, _session_factory

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    _engine = create_engine(config)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    if create_tables:
        from .seed import create_schema

        await create_schema(_engine)

    logger.info("Database initialized ({})", _engine.url.render_as_string(hide_password=True))


async def close_db() -> None:
    """Close database connection."""
    global _engine, _session_factory

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def get_session():
    """Get database session for dependency injection."""
    if _session_factory is None:
        raise RuntimeError("Database not initialized")

    async with _session_factory() as session:
        yield session
