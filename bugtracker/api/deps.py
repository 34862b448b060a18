"""API dependencies for the store gateway and bearer authentication."""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from bugtracker.core.exceptions import AuthenticationError
from bugtracker.core.security import decode_token
from bugtracker.database import get_gateway
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import Ok, parse_id

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> int:
    """
    Get the caller's user id from the JWT access token.

    Args:
        request: FastAPI request object
        credentials: HTTP Bearer credentials

    Returns:
        Authenticated user id

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if not credentials:
        raise AuthenticationError(message="Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise AuthenticationError(message="Invalid or expired token")

    # Validate token type
    if payload.get("type") != "access":
        raise AuthenticationError(message="Invalid token type")

    user_id = parse_id(payload.get("sub"))
    if not isinstance(user_id, Ok):
        raise AuthenticationError(message="Invalid token payload")

    # Store user ID in request state for logging
    request.state.user_id = user_id.value
    structlog.contextvars.bind_contextvars(user_id=user_id.value)

    return user_id.value


# Type aliases for common dependencies
Gateway = Annotated[StoreGateway, Depends(get_gateway)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
