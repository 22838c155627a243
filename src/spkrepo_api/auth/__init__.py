# SPDX-License-Identifier: MIT
"""Authentication: password login, API keys and password reset."""

from .login import authenticate, request_password_reset, reset_password, validate_api_key
from .passwords import generate_api_key, hash_password, verify_password
from .tokens import AuthenticatedUser, get_current_user, parse_authorization_header, require_role

__all__ = [
    "AuthenticatedUser",
    "authenticate",
    "generate_api_key",
    "get_current_user",
    "hash_password",
    "parse_authorization_header",
    "request_password_reset",
    "require_role",
    "reset_password",
    "validate_api_key",
    "verify_password",
]
