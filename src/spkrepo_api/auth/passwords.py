# SPDX-License-Identifier: MIT
"""Password hashing and reset token helpers."""

import hashlib
import hmac
import secrets
import string
from functools import lru_cache

import bcrypt

RESET_TOKEN_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password with bcrypt.

    Args:
        password: Plaintext password
        rounds: bcrypt cost factor (4-31)

    Returns:
        The bcrypt hash as a string, suitable for the ``user.password`` column.
    """
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash.

    A stored value that is not a valid bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


@lru_cache(maxsize=None)
def dummy_password_hash(rounds: int = 12) -> str:
    """Hash of a random password, checked when no user matched a login.

    Verifying against it costs as much as verifying a real user's hash
    made with the same cost factor.
    """
    return hash_password(secrets.token_urlsafe(16), rounds)


def generate_reset_token(length: int = 30) -> tuple[str, str]:
    """Generate a password reset token.

    Returns:
        Tuple of (token, token_hash) where token is the alphanumeric
        plaintext handed to the user and token_hash is what we store.
    """
    token = "".join(secrets.choice(RESET_TOKEN_ALPHABET) for _ in range(length))
    return token, hash_token(token)


def generate_api_key() -> str:
    """Generate a new opaque API key."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """Hash a token for comparison with stored hash."""
    return hashlib.sha256(token.encode()).hexdigest()


def token_matches(token: str, token_hash: str | None) -> bool:
    """Compare a plaintext token with a stored digest in constant time."""
    digest = hash_token(token)
    if not token_hash:
        return False
    return hmac.compare_digest(digest, token_hash)
