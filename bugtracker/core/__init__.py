"""Core security and utility modules."""

from bugtracker.core.exceptions import (
    APIException,
    AuthenticationError,
    ConflictError,
    InvalidReferenceError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from bugtracker.core.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Security
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    # Exceptions
    "APIException",
    "AuthenticationError",
    "ConflictError",
    "InvalidReferenceError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
]
