# SPDX-License-Identifier: MIT
"""Pydantic models for package data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PackageListItem(BaseModel):
    """Localized package entry of the package listing.

    One entry per (version, active build) pair of a package.
    """

    model_config = ConfigDict(from_attributes=True)

    package: str
    changelog: str | None = None
    link: str | None = Field(None, description="Path of the active build")
    desc: str | None = None
    distributor: str | None = None
    distributor_url: str | None = None
    dname: str | None = Field(None, description="Localized display name")


class PackageModel(BaseModel):
    """Package row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    author_user_id: int | None = None
    name: str
    insert_date: datetime | None = None


class VersionModel(BaseModel):
    """Version row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    package_id: int
    ver: int
    upstream_version: str
    changelog: str | None = None
    report_url: str | None = None
    distributor: str | None = None
    distributor_url: str | None = None
    maintainer: str | None = None
    maintainer_url: str | None = None
    dependencies: str | None = None
    conf_dependencies: str | None = None
    conflicts: str | None = None
    conf_conflicts: str | None = None
    install_wizard: bool | None = None
    upgrade_wizard: bool | None = None
    startable: bool | None = None
    license: str | None = None
    insert_date: datetime


class BuildModel(BaseModel):
    """Build row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    package_id: int
    firmware_id: int
    publisher_user_id: int | None = None
    checksum: str | None = None
    exec_size: int
    path: str
    md5: str
    insert_date: datetime
    active: bool | None = None


class ScreenshotModel(BaseModel):
    """Screenshot with the name of its package."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    package: str
    path: str


class DownloadModel(BaseModel):
    """Recorded download event."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    build_id: int
    architecture_id: int
    firmware_build: int
    ip_address: str
    user_agent: str | None = None
    date: datetime | None = None


class NewDownload(BaseModel):
    """Request body reporting a download."""

    build_id: int
    architecture_id: int
    firmware_build: int = Field(..., ge=0)
