"""Utility functions and helpers."""

from bugtracker.utils.validators import (
    Err,
    Ok,
    is_valid_email,
    parse_id,
    unwrap,
)

__all__ = [
    "Err",
    "Ok",
    "is_valid_email",
    "parse_id",
    "unwrap",
]
