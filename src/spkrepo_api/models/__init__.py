# SPDX-License-Identifier: MIT
"""Pydantic models for API requests and responses."""

from .catalog import (
    ArchitectureModel,
    FirmwareModel,
    IdRequest,
    LanguageModel,
    NewArchitecture,
    NewFirmware,
    ServiceModel,
)
from .package import (
    BuildModel,
    DownloadModel,
    NewDownload,
    PackageListItem,
    PackageModel,
    ScreenshotModel,
    VersionModel,
)
from .user import (
    LoginRequest,
    LoginResponse,
    PasswordReset,
    PasswordResetRequest,
    PasswordResetRequestResponse,
    RoleModel,
    UserModel,
    UserWithKeyModel,
)

__all__ = [
    # Reference data
    "ArchitectureModel",
    "FirmwareModel",
    "IdRequest",
    "LanguageModel",
    "NewArchitecture",
    "NewFirmware",
    "ServiceModel",
    # Package models
    "BuildModel",
    "DownloadModel",
    "NewDownload",
    "PackageListItem",
    "PackageModel",
    "ScreenshotModel",
    "VersionModel",
    # Users
    "LoginRequest",
    "LoginResponse",
    "PasswordReset",
    "PasswordResetRequest",
    "PasswordResetRequestResponse",
    "RoleModel",
    "UserModel",
    "UserWithKeyModel",
]
