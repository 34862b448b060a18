"""Common Pydantic schemas used across the application."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Fields use snake_case names in Python and PascalCase aliases on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: dict[str, Any] = Field(
        ...,
        examples=[
            {
                "code": "MISSING_FIELDS",
                "message": "Missing required fields: BugID, UserID, and CommentText are required",
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
            }
        ],
    )


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str


class DeletedCountResponse(BaseSchema):
    """Number of rows removed by a bulk delete."""

    deleted_count: int = Field(..., alias="DeletedCount")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: Optional[str] = None
