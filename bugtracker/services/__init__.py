"""Service layer: validation, reference checks and orchestration."""

from bugtracker.services.bug import BugService
from bugtracker.services.comment import CommentService
from bugtracker.services.project import ProjectService
from bugtracker.services.user import UserService

__all__ = [
    "BugService",
    "CommentService",
    "ProjectService",
    "UserService",
]
