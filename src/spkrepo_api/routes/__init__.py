# SPDX-License-Identifier: MIT
"""API route modules."""

from . import auth, catalog, packages, users

__all__ = ["auth", "catalog", "packages", "users"]
