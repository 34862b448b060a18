"""Comment commands and records."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bugtracker.schemas.common import BaseSchema


class CommentCreate(BaseSchema):
    """Validated command for creating a comment."""

    bug_id: int = Field(..., alias="BugID")
    user_id: int = Field(..., alias="UserID")
    comment_text: str = Field(..., alias="CommentText", min_length=1)


class CommentUpdate(BaseSchema):
    """Validated partial update; unset fields are left unchanged."""

    comment_text: Optional[str] = Field(default=None, alias="CommentText", min_length=1)


class CommentResponse(BaseSchema):
    """Persisted comment row."""

    comment_id: int = Field(..., alias="CommentID")
    bug_id: int = Field(..., alias="BugID")
    user_id: int = Field(..., alias="UserID")
    comment_text: str = Field(..., alias="CommentText")
    created_at: datetime = Field(..., alias="CreatedAt")
