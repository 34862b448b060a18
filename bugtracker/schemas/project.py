"""Project commands and records."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bugtracker.schemas.common import BaseSchema


class ProjectCreate(BaseSchema):
    """Validated command for creating a project."""

    project_name: str = Field(..., alias="ProjectName", min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, alias="Description")
    created_by: int = Field(..., alias="CreatedBy")


class ProjectUpdate(BaseSchema):
    """Validated partial update for a project."""

    project_name: Optional[str] = Field(default=None, alias="ProjectName", min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, alias="Description")


class ProjectResponse(BaseSchema):
    """Persisted project row."""

    project_id: int = Field(..., alias="ProjectID")
    project_name: str = Field(..., alias="ProjectName")
    description: Optional[str] = Field(default=None, alias="Description")
    created_by: int = Field(..., alias="CreatedBy")
    created_at: datetime = Field(..., alias="CreatedAt")
