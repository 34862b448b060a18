"""Pydantic schemas for commands and records."""

from bugtracker.schemas.bug import BugCreate, BugResponse, BugUpdate
from bugtracker.schemas.comment import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from bugtracker.schemas.common import (
    DeletedCountResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from bugtracker.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from bugtracker.schemas.user import (
    LoginResponse,
    PasswordChange,
    UserInDB,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # User
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "UserInDB",
    "PasswordChange",
    "LoginResponse",
    # Project
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    # Bug
    "BugCreate",
    "BugResponse",
    "BugUpdate",
    # Comment
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
    # Common
    "DeletedCountResponse",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
