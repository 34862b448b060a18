"""Input validation utilities for untyped request payloads."""

import enum
import re
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Mapping, Optional, TypeVar, Union

from bugtracker.core.exceptions import ValidationError

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful parse carrying the typed value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed parse carrying the reason."""

    code: str
    message: str


ParseResult = Union[Ok[T], Err]

# Keys are 32-bit signed INTEGER columns
MAX_ID = 2**31 - 1


def unwrap(result: "ParseResult[T]") -> T:
    """
    Return the parsed value or raise the failure as a ValidationError.

    Args:
        result: Result of a parse function

    Returns:
        The parsed value

    Raises:
        ValidationError: If the result is an Err
    """
    if isinstance(result, Err):
        raise ValidationError(message=result.message, code=result.code)
    return result.value


def is_int(value: Any) -> bool:
    """Check for a real integer that fits a key column (booleans are not numbers here)."""
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return -MAX_ID - 1 <= value <= MAX_ID


def is_optional_int(value: Any) -> bool:
    """Check for an integer or None."""
    return value is None or is_int(value)


def is_optional_text(value: Any) -> bool:
    """Check for a string or None."""
    return value is None or isinstance(value, str)


def parse_id(value: Any, name: str = "ID") -> "ParseResult[int]":
    """
    Parse a positive integer identifier.

    Accepts an int or a string of ASCII decimal digits, as received from a
    path, no larger than MAX_ID.

    Args:
        value: Raw identifier
        name: Label used in the failure message

    Returns:
        Ok with the integer id, or Err(INVALID_ID)
    """
    if is_int(value):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        parsed = int(value.strip())
    else:
        return Err("INVALID_ID", f"Invalid {name}")

    if not 0 < parsed <= MAX_ID:
        return Err("INVALID_ID", f"Invalid {name}")
    return Ok(parsed)


def check_payload(raw: Any, resource: str) -> Optional[Err]:
    """Reject an absent or non-object payload."""
    if raw is None:
        return Err("MISSING_PAYLOAD", f"Please provide {resource} data")
    if not isinstance(raw, Mapping):
        return Err("INVALID_PAYLOAD", f"{resource.capitalize()} data must be a JSON object")
    return None


def check_update_payload(raw: Any) -> Optional[Err]:
    """Reject an absent, empty or non-object partial update."""
    if not raw or not isinstance(raw, Mapping):
        return Err("NO_UPDATE_DATA", "No update data provided")
    return None


def missing_fields(raw: Mapping[str, Any], fields: Iterable[str]) -> list[str]:
    """Return the required fields that are absent or null."""
    return [name for name in fields if raw.get(name) is None]


def clean_text(value: str) -> Optional[str]:
    """Trim text, returning None if nothing is left."""
    trimmed = value.strip()
    return trimmed or None


def to_enum(enum_cls: type[E], value: Any) -> Optional[E]:
    """Return the enum member with this value, or None."""
    try:
        return enum_cls(value)
    except ValueError:
        return None


def is_valid_email(email: str) -> bool:
    """
    Basic email validation.

    Args:
        email: Email address to validate

    Returns:
        True if email format is valid, False otherwise
    """
    if not email:
        return False

    # Basic email pattern
    pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    return bool(re.match(pattern, email))


def is_valid_username(username: str) -> bool:
    """Usernames are 3-50 letters, digits, underscores or hyphens."""
    return bool(re.fullmatch(r"[a-zA-Z0-9_-]{3,50}", username))
