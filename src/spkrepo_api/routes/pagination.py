# SPDX-License-Identifier: MIT
"""Limit/offset query parameters shared by list endpoints."""

from dataclasses import dataclass

from fastapi import Query, Request


@dataclass
class Page:
    """Resolved pagination window."""

    limit: int
    offset: int


def get_page(
    request: Request,
    limit: int | None = Query(None, ge=0, description="Maximum number of rows"),
    offset: int = Query(0, ge=0, description="Number of rows to skip"),
) -> Page:
    """Resolve limit/offset, falling back to the configured default limit.

    Limits are passed through as given unless a maximum is configured.
    """
    pagination = request.app.state.config.pagination
    if limit is None:
        limit = pagination.default_limit
    if pagination.max_limit is not None:
        limit = min(limit, pagination.max_limit)
    return Page(limit=limit, offset=offset)
