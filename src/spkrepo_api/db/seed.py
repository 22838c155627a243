# SPDX-License-Identifier: MIT
"""Schema creation and reference data seeding."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Base, Language, Role

DEFAULT_ROLES = [
    ("admin", "Administrator"),
    ("package_admin", "Package Administrator"),
    ("developer", "Developer"),
]

DEFAULT_LANGUAGES = [
    ("enu", "English"),
    ("fre", "French"),
    ("ger", "German"),
]


async def create_schema(engine, drop_existing: bool = False) -> None:
    """Create all database tables from the models.

    Args:
        engine: Async engine to create the tables with
        drop_existing: If True, drop all existing tables first
    """
    async with engine.begin() as conn:
        if drop_existing:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def seed_reference_data(session: AsyncSession) -> dict[str, int]:
    """Insert the default roles and languages that are missing.

    Safe to run repeatedly.

    Returns:
        Number of rows inserted per table
    """
    inserted = {"role": 0, "language": 0}

    existing_roles = set((await session.execute(select(Role.name))).scalars())
    for name, description in DEFAULT_ROLES:
        if name not in existing_roles:
            session.add(Role(name=name, description=description))
            inserted["role"] += 1

    existing_languages = set((await session.execute(select(Language.code))).scalars())
    for code, name in DEFAULT_LANGUAGES:
        if code not in existing_languages:
            session.add(Language(code=code, name=name))
            inserted["language"] += 1

    await session.commit()
    logger.info("Seeded {} roles and {} languages", inserted["role"], inserted["language"])
    return inserted
