"""Password hashing and token helpers."""
from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import timedelta

from jose import jwt

from study_sns.core.settings import settings
from study_sns.db.time import utcnow

_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: int | None = None) -> str:
    """Return a salted PBKDF2-SHA256 hash in ``scheme$iterations$salt$digest`` form."""
    rounds = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return f"{_SCHEME}${rounds}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """Check a plain password against a stored hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        scheme, rounds, salt_hex, digest_hex = encoded.split("$")
        if scheme != _SCHEME:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        iterations = int(rounds)
    except ValueError:
        return False

    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(candidate, expected)


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token for the given user id.

    Args:
        user_id: Identifier stored in the ``sub`` claim
        expires_delta: Optional override for the token lifetime

    Returns:
        Encoded JWT string
    """
    expire = utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
