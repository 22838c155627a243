# SPDX-License-Identifier: MIT
"""Package repository backend for packages, builds, firmware and user accounts."""

__version__ = "0.1.0"

from .app import create_app
from .config import APIConfig, AuthConfig, DatabaseConfig, LoggingConfig, PaginationConfig
from .middleware.errors import (
    APIError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
)

__all__ = [
    # App factory
    "create_app",
    # Configuration
    "APIConfig",
    "AuthConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "PaginationConfig",
    # Errors
    "APIError",
    "ConflictError",
    "ErrorCode",
    "ForbiddenError",
    "NotFoundError",
    "ServiceUnavailableError",
    "UnauthorizedError",
]
