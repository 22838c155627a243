# SPDX-License-Identifier: MIT
"""Package listing, build, screenshot and download endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import AuthenticatedUser, require_role
from ..db import catalog, get_session, packages
from ..middleware.errors import NotFoundError
from ..models.package import (
    BuildModel,
    DownloadModel,
    NewDownload,
    PackageListItem,
    PackageModel,
    ScreenshotModel,
    VersionModel,
)
from ..models.user import UserModel
from .pagination import Page, get_page

router = APIRouter()


@router.get("/package", response_model=list[PackageListItem])
async def list_packages(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[PackageListItem]:
    """List packages with their active build and localized text.

    Packages without an active build are not listed.
    """
    language = request.app.state.config.default_language
    rows = await packages.find_all_packages(session, language, page.limit, page.offset)
    return [PackageListItem.model_validate(dict(row)) for row in rows]


@router.get("/package/{package_id}", response_model=PackageModel)
async def get_package(
    package_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PackageModel:
    package = await packages.find_package(session, package_id)
    if package is None:
        raise NotFoundError("Package", package_id)
    return PackageModel.model_validate(package)


@router.get("/package/{package_id}/version", response_model=list[VersionModel])
async def list_package_versions(
    package_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[VersionModel]:
    """List a package's versions ordered by version number."""
    if await packages.find_package(session, package_id) is None:
        raise NotFoundError("Package", package_id)
    versions = await packages.find_package_versions(session, package_id, page.limit, page.offset)
    return [VersionModel.model_validate(v) for v in versions]


@router.get("/package/{package_id}/maintainer", response_model=list[UserModel])
async def list_package_maintainers(
    package_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[UserModel]:
    if await packages.find_package(session, package_id) is None:
        raise NotFoundError("Package", package_id)
    maintainers = await packages.find_package_maintainers(session, package_id)
    return [UserModel.model_validate(u) for u in maintainers]


@router.get("/build", response_model=list[BuildModel])
async def list_builds(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[BuildModel]:
    """Retrieve every build."""
    builds = await packages.find_all_builds(session)
    return [BuildModel.model_validate(b) for b in builds]


@router.put("/build/{build_id}/active", response_model=BuildModel)
async def activate_build(
    build_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
    user: Annotated[AuthenticatedUser, Depends(require_role())],
) -> BuildModel:
    """Make a build the only active build of its package."""
    build = await packages.set_active_build(session, build_id)
    if build is None:
        raise NotFoundError("Build", build_id)
    logger.info(
        "User {} activated build {} of package {}", user.user_id, build.id, build.package_id
    )
    return BuildModel.model_validate(build)


@router.get("/screenshot", response_model=list[ScreenshotModel])
async def list_screenshots(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[ScreenshotModel]:
    rows = await packages.find_all_screenshots(session, page.limit, page.offset)
    return [ScreenshotModel.model_validate(dict(row)) for row in rows]


@router.post("/download", response_model=DownloadModel)
async def record_download(
    body: NewDownload,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    user_agent: Annotated[str | None, Header()] = None,
) -> DownloadModel:
    """Record a download of a build from the requester's address."""
    if await packages.find_build(session, body.build_id) is None:
        raise NotFoundError("Build", body.build_id)
    if await catalog.find_architecture(session, body.architecture_id) is None:
        raise NotFoundError("Architecture", body.architecture_id)

    ip_address = request.client.host if request.client else "unknown"
    download = await packages.record_download(
        session,
        build_id=body.build_id,
        architecture_id=body.architecture_id,
        firmware_build=body.firmware_build,
        ip_address=ip_address,
        user_agent=user_agent[:255] if user_agent else None,
    )
    return DownloadModel.model_validate(download)


@router.get("/download", response_model=list[DownloadModel])
async def list_downloads(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
    user: Annotated[AuthenticatedUser, Depends(require_role())],
) -> list[DownloadModel]:
    downloads = await packages.find_all_downloads(session, page.limit, page.offset)
    return [DownloadModel.model_validate(d) for d in downloads]
