# SPDX-License-Identifier: MIT
"""Queries for the reference tables: architectures, firmware, languages, services."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Architecture, Firmware, Language, Service


async def find_all_architectures(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Architecture]:
    """Get a page of architectures ordered by id."""
    query = select(Architecture).order_by(Architecture.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())


async def find_architecture(session: AsyncSession, architecture_id: int) -> Architecture | None:
    return await session.get(Architecture, architecture_id)


async def create_architecture(session: AsyncSession, code: str) -> Architecture:
    """Insert an architecture and return the stored row."""
    architecture = Architecture(code=code)
    session.add(architecture)
    await session.commit()
    await session.refresh(architecture)
    return architecture


async def delete_architecture(session: AsyncSession, architecture_id: int) -> int:
    """Delete an architecture by id.

    Returns:
        Number of deleted rows, 0 when the id does not exist
    """
    result = await session.execute(delete(Architecture).where(Architecture.id == architecture_id))
    await session.commit()
    return result.rowcount


async def find_all_firmware(session: AsyncSession) -> list[Firmware]:
    """Get every firmware row, unpaginated."""
    result = await session.execute(select(Firmware).order_by(Firmware.id))
    return list(result.scalars().all())


async def find_all_firmware_paginated(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Firmware]:
    query = select(Firmware).order_by(Firmware.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())


async def create_firmware(session: AsyncSession, version: str, build: int) -> Firmware:
    firmware = Firmware(version=version, build=build)
    session.add(firmware)
    await session.commit()
    await session.refresh(firmware)
    return firmware


async def delete_firmware(session: AsyncSession, firmware_id: int) -> int:
    result = await session.execute(delete(Firmware).where(Firmware.id == firmware_id))
    await session.commit()
    return result.rowcount


async def find_all_languages(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Language]:
    query = select(Language).order_by(Language.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())


async def find_language_by_code(session: AsyncSession, code: str) -> Language | None:
    result = await session.execute(select(Language).where(Language.code == code))
    return result.scalar_one_or_none()


async def find_all_services(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Service]:
    query = select(Service).order_by(Service.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())
