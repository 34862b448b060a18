"""Bug commands and records."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from bugtracker.models.bug import BugPriority, BugStatus
from bugtracker.schemas.common import BaseSchema


class BugCreate(BaseSchema):
    """Validated command for creating a bug."""

    project_id: int = Field(..., alias="ProjectID")
    title: str = Field(..., alias="Title", min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, alias="Description")
    status: BugStatus = Field(default=BugStatus.OPEN, alias="Status")
    priority: BugPriority = Field(default=BugPriority.MEDIUM, alias="Priority")
    reported_by: int = Field(..., alias="ReportedBy")
    assigned_to: Optional[int] = Field(default=None, alias="AssignedTo")


class BugUpdate(BaseSchema):
    """Validated partial update for a bug."""

    title: Optional[str] = Field(default=None, alias="Title", min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, alias="Description")
    status: Optional[BugStatus] = Field(default=None, alias="Status")
    priority: Optional[BugPriority] = Field(default=None, alias="Priority")
    assigned_to: Optional[int] = Field(default=None, alias="AssignedTo")


class BugResponse(BaseSchema):
    """Persisted bug row."""

    bug_id: int = Field(..., alias="BugID")
    project_id: int = Field(..., alias="ProjectID")
    title: str = Field(..., alias="Title")
    description: Optional[str] = Field(default=None, alias="Description")
    status: BugStatus = Field(..., alias="Status")
    priority: BugPriority = Field(..., alias="Priority")
    reported_by: int = Field(..., alias="ReportedBy")
    assigned_to: Optional[int] = Field(default=None, alias="AssignedTo")
    created_at: datetime = Field(..., alias="CreatedAt")
    updated_at: datetime = Field(..., alias="UpdatedAt")
