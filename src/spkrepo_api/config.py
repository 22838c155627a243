# SPDX-License-Identifier: MIT
"""API server configuration."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class DatabaseConfig:
    """Database connection configuration."""

    url: str = "sqlite:///./spkrepo.db"
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: float = 30.0


@dataclass
class AuthConfig:
    """Authentication configuration."""

    bcrypt_rounds: int = 12
    api_key_header: str = "X-API-Key"
    admin_role: str = "admin"
    reset_token_length: int = 30
    reset_token_ttl_minutes: int = 60
    # Return the reset token in the API response instead of only issuing it
    expose_reset_token: bool = False


@dataclass
class PaginationConfig:
    """Pagination defaults for list endpoints."""

    default_limit: int = 20
    max_limit: Optional[int] = None


@dataclass
class LoggingConfig:
    """Log output configuration."""

    level: str = "INFO"
    format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan> | <level>{message}</level>"
    )


@dataclass
class APIConfig:
    """Main API server configuration."""

    # Server settings
    title: str = "spkrepo API"
    description: str = "Package repository backend for packages, builds and firmware"
    version: str = "0.1.0"
    debug: bool = False

    # Sub-configurations
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Language code used to pick localized display names and descriptions
    default_language: str = "enu"

    # API settings
    api_prefix: str = "/api/v1"
    docs_url: str = "/docs"
    openapi_url: str = "/openapi.json"

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Create configuration from environment variables.

        A ``.env`` file in the working directory is loaded first; variables
        already present in the environment take precedence.
        """
        import os

        from dotenv import find_dotenv, load_dotenv

        load_dotenv(find_dotenv(usecwd=True))
        config = cls()

        # Database
        if db_url := os.getenv("SPKREPO_DATABASE_URL"):
            config.database.url = db_url
        config.database.echo = os.getenv("SPKREPO_DATABASE_ECHO", "").lower() == "true"
        if pool_size := os.getenv("SPKREPO_DATABASE_POOL_SIZE"):
            config.database.pool_size = int(pool_size)
        if pool_timeout := os.getenv("SPKREPO_DATABASE_POOL_TIMEOUT"):
            config.database.pool_timeout = float(pool_timeout)

        # Auth
        if rounds := os.getenv("SPKREPO_BCRYPT_ROUNDS"):
            config.auth.bcrypt_rounds = int(rounds)
        if ttl := os.getenv("SPKREPO_RESET_TOKEN_TTL_MINUTES"):
            config.auth.reset_token_ttl_minutes = int(ttl)
        config.auth.expose_reset_token = (
            os.getenv("SPKREPO_EXPOSE_RESET_TOKEN", "").lower() == "true"
        )

        # Pagination
        if default_limit := os.getenv("SPKREPO_PAGINATION_DEFAULT_LIMIT"):
            config.pagination.default_limit = int(default_limit)
        if max_limit := os.getenv("SPKREPO_PAGINATION_MAX_LIMIT"):
            config.pagination.max_limit = int(max_limit)

        # Logging
        if log_level := os.getenv("SPKREPO_LOG_LEVEL"):
            config.logging.level = log_level.upper()

        if api_prefix := os.getenv("SPKREPO_API_PREFIX"):
            config.api_prefix = api_prefix
        if language := os.getenv("SPKREPO_DEFAULT_LANGUAGE"):
            config.default_language = language

        # Debug
        config.debug = os.getenv("SPKREPO_DEBUG", "").lower() == "true"
        if config.debug:
            config.logging.level = "DEBUG"

        return config
