"""Custom exception classes for the application."""

from typing import Any, Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception with standardized error format."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[list[dict[str, Any]]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.error_message = message
        self.details = details

        # Build the error response
        error_body = {
            "error": {
                "code": code,
                "message": message,
            }
        }
        if details:
            error_body["error"]["details"] = details

        super().__init__(
            status_code=status_code,
            detail=error_body,
            headers=headers,
        )

    def __str__(self) -> str:
        return f"{self.code}: {self.error_message}"


class ValidationError(APIException):
    """Malformed, missing or mistyped input."""

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "VALIDATION_ERROR",
        details: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=code,
            message=message,
            details=details,
        )


class InvalidReferenceError(APIException):
    """A referenced entity (bug, user, project) does not exist."""

    def __init__(
        self,
        resource: str = "Resource",
        field: Optional[str] = None,
        message: Optional[str] = None,
        code: Optional[str] = None,
    ):
        self.resource = resource
        field = field or f"{resource}ID"
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=message or f"Invalid {field}: {resource} does not exist",
            details=[{"field": field, "message": f"{resource} does not exist"}],
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(
        self,
        resource: str = "Resource",
        message: Optional[str] = None,
        code: str = "NOT_FOUND",
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code=code,
            message=message or f"{resource} not found",
        )


class AuthenticationError(APIException):
    """Authentication failed exception."""

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_ERROR",
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code=code,
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "CONFLICT_ERROR",
        details: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code=code,
            message=message,
            details=details,
        )


class StoreError(APIException):
    """The relational store call itself failed."""

    def __init__(
        self,
        message: str = "Database query failed",
        code: str = "STORE_ERROR",
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=code,
            message=message,
        )
