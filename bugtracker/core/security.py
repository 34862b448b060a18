"""Credential hashing and access token helpers."""

import base64
import binascii
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from jose import jwt

from bugtracker.config import settings

# Initialize Argon2 password hasher with secure defaults
password_hasher = PasswordHasher(
    time_cost=3,  # Number of iterations
    memory_cost=65536,  # 64 MB
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        password: Plain text password to verify
        hashed_password: Hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    try:
        password_hasher.verify(hashed_password, password)
        return True
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed_password: str) -> bool:
    """Check if a password hash was produced with outdated parameters."""
    return password_hasher.check_needs_rehash(hashed_password)


def _decode_key(value: str) -> str:
    # Keys may be configured base64-encoded or as raw PEM
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


def _get_algorithm() -> str:
    """Get the JWT algorithm to use."""
    # Without a private key fall back to HS256 with the secret key
    if not settings.jwt_private_key:
        return "HS256"
    return settings.jwt_algorithm


def _signing_key() -> str:
    if settings.jwt_private_key:
        return _decode_key(settings.jwt_private_key)
    return settings.secret_key


def _verification_key() -> str:
    if settings.jwt_public_key and _get_algorithm().startswith(("RS", "ES")):
        return _decode_key(settings.jwt_public_key)
    return _signing_key()


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        user_id: User ID to encode in token
        role: User role to encode in token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    payload = {
        "sub": str(user_id),
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": "access",
    }

    return jwt.encode(payload, _signing_key(), algorithm=_get_algorithm())


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, _verification_key(), algorithms=[_get_algorithm()])
