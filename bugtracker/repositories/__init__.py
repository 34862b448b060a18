"""Entity repositories over the store gateway."""

from bugtracker.repositories.base import BaseRepository, UpdateBuilder
from bugtracker.repositories.bug import BugRepository
from bugtracker.repositories.comment import CommentRepository
from bugtracker.repositories.project import ProjectRepository
from bugtracker.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UpdateBuilder",
    "UserRepository",
    "ProjectRepository",
    "BugRepository",
    "CommentRepository",
]
