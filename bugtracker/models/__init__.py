"""SQLAlchemy table models for the Bug Tracker."""

from bugtracker.models.bug import Bug, BugPriority, BugStatus
from bugtracker.models.comment import Comment
from bugtracker.models.project import Project
from bugtracker.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "Project",
    "Bug",
    "BugStatus",
    "BugPriority",
    "Comment",
]
