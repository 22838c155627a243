# SPDX-License-Identifier: MIT
"""Queries for packages, versions, builds, screenshots and download events."""

from sqlalchemy import RowMapping, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    Build,
    Description,
    DisplayName,
    Download,
    Language,
    Package,
    PackageUserMaintainer,
    Screenshot,
    User,
    Version,
)


# =============================================================================
# Packages and versions
# =============================================================================


async def find_all_packages(
    session: AsyncSession,
    language_code: str,
    limit: int,
    offset: int = 0,
) -> list[RowMapping]:
    """Get the localized package listing.

    Every version of a package is paired with the package's active builds
    and with its display name and description in ``language_code``.
    Packages without an active build, and versions without localized text
    in that language, are left out. An unknown language code yields no rows.

    Args:
        session: Database session
        language_code: Three-letter language code (e.g. ``"enu"``)
        limit: Maximum number of rows to return
        offset: Number of rows to skip

    Returns:
        Rows with keys package, changelog, link, desc, distributor,
        distributor_url and dname
    """
    language_id = (
        select(Language.id).where(Language.code == language_code).scalar_subquery()
    )
    query = (
        select(
            Package.name.label("package"),
            Version.changelog,
            Build.path.label("link"),
            Description.text.label("desc"),
            Version.distributor,
            Version.distributor_url,
            DisplayName.name.label("dname"),
        )
        .select_from(Package)
        .join(Version, Version.package_id == Package.id)
        .outerjoin(Description, Description.version_id == Version.id)
        .outerjoin(DisplayName, DisplayName.version_id == Version.id)
        .outerjoin(Build, Build.package_id == Package.id)
        .where(
            Build.active == True,  # noqa: E712
            Description.language_id == language_id,
            DisplayName.language_id == language_id,
        )
        .order_by(Package.id, Version.id, Build.id)
        .limit(limit)
        .offset(offset)
    )
    result = await session.execute(query)
    return list(result.mappings().all())


async def find_package(session: AsyncSession, package_id: int) -> Package | None:
    return await session.get(Package, package_id)


async def find_package_versions(
    session: AsyncSession,
    package_id: int,
    limit: int,
    offset: int = 0,
) -> list[Version]:
    """Get a page of a package's versions ordered by version number."""
    query = (
        select(Version)
        .where(Version.package_id == package_id)
        .order_by(Version.ver, Version.id)
        .limit(limit)
        .offset(offset)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def find_package_maintainers(session: AsyncSession, package_id: int) -> list[User]:
    query = (
        select(User)
        .join(PackageUserMaintainer, PackageUserMaintainer.user_id == User.id)
        .where(PackageUserMaintainer.package_id == package_id)
        .order_by(User.id)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


# =============================================================================
# Builds
# =============================================================================


async def find_all_builds(session: AsyncSession) -> list[Build]:
    """Get every build row, unpaginated."""
    result = await session.execute(select(Build).order_by(Build.id))
    return list(result.scalars().all())


async def find_build(session: AsyncSession, build_id: int) -> Build | None:
    return await session.get(Build, build_id)


async def set_active_build(session: AsyncSession, build_id: int) -> Build | None:
    """Make a build the package's only active build.

    The other builds of the same package are deactivated in the same
    transaction.

    Returns:
        The activated build, or None if the id does not exist
    """
    build = await session.get(Build, build_id)
    if build is None:
        return None

    await session.execute(
        update(Build)
        .where(Build.package_id == build.package_id, Build.id != build.id)
        .values(active=False)
    )
    build.active = True
    await session.commit()
    await session.refresh(build)
    return build


# =============================================================================
# Screenshots
# =============================================================================


async def find_all_screenshots(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[RowMapping]:
    """Get a page of screenshots with the owning package's name."""
    query = (
        select(Screenshot.id, Package.name.label("package"), Screenshot.path)
        .join(Package, Package.id == Screenshot.package_id)
        .order_by(Screenshot.id)
        .limit(limit)
        .offset(offset)
    )
    result = await session.execute(query)
    return list(result.mappings().all())


async def find_screenshots_for_package(session: AsyncSession, package_id: int) -> list[Screenshot]:
    query = select(Screenshot).where(Screenshot.package_id == package_id).order_by(Screenshot.id)
    result = await session.execute(query)
    return list(result.scalars().all())


# =============================================================================
# Download events
# =============================================================================


async def record_download(
    session: AsyncSession,
    build_id: int,
    architecture_id: int,
    firmware_build: int,
    ip_address: str,
    user_agent: str | None = None,
) -> Download:
    """Record a download of a build.

    Args:
        session: Database session
        build_id: Downloaded build
        architecture_id: Architecture the client runs on
        firmware_build: Firmware build number reported by the client
        ip_address: Requester address
        user_agent: Requester User-Agent header, if any

    Returns:
        The stored Download row
    """
    download = Download(
        build_id=build_id,
        architecture_id=architecture_id,
        firmware_build=firmware_build,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(download)
    await session.commit()
    await session.refresh(download)
    return download


async def find_all_downloads(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Download]:
    query = select(Download).order_by(Download.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())
