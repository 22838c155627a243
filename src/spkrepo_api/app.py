# SPDX-License-Identifier: MIT
"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import APIConfig
from .db import get_session
from .log import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config: APIConfig = app.state.config

    from .db import init_db

    await init_db(config.database)
    logger.info("{} {} started", config.title, config.version)

    yield

    from .db import close_db

    await close_db()
    logger.info("{} stopped", config.title)


def create_app(config: APIConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: API configuration. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    if config is None:
        config = APIConfig.from_env()

    configure_logging(config.logging)

    app = FastAPI(
        title=config.title,
        description=config.description,
        version=config.version,
        debug=config.debug,
        docs_url=config.docs_url,
        openapi_url=config.openapi_url,
        lifespan=lifespan,
    )

    # Store config in app state
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from .middleware.errors import add_error_handlers

    add_error_handlers(app)

    # Register API routes
    from .routes import auth, catalog, packages, users

    app.include_router(catalog.router, prefix=config.api_prefix, tags=["catalog"])
    app.include_router(packages.router, prefix=config.api_prefix, tags=["packages"])
    app.include_router(users.router, prefix=config.api_prefix, tags=["users"])
    app.include_router(auth.router, prefix=config.api_prefix, tags=["auth"])

    @app.get("/health")
    async def health_check(
        session: Annotated[AsyncSession, Depends(get_session)],
    ) -> JSONResponse:
        """Health check endpoint - verifies database connectivity."""
        try:
            await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("Health check failed: {}", e)
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "version": config.version, "database": "error"},
            )
        return JSONResponse(
            content={"status": "healthy", "version": config.version, "database": "connected"}
        )

    return app
