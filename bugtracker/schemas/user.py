"""User and credential commands and records."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bugtracker.models.user import UserRole
from bugtracker.schemas.common import BaseSchema


class UserRegister(BaseModel):
    """Validated command for registering a user. Passwords are never stripped."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., alias="Username", min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    email: str = Field(..., alias="Email", max_length=255)
    password: str = Field(..., alias="Password", min_length=8, max_length=128)
    role: UserRole = Field(default=UserRole.DEVELOPER, alias="Role")


class UserLogin(BaseModel):
    """Validated login credentials; username may also be an email."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseSchema):
    """Validated partial profile update."""

    username: Optional[str] = Field(
        default=None, alias="Username", min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$"
    )
    email: Optional[str] = Field(default=None, alias="Email", max_length=255)


class PasswordChange(BaseModel):
    """Validated password change command."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class UserResponse(BaseSchema):
    """Public user record."""

    user_id: int = Field(..., alias="UserID")
    username: str = Field(..., alias="Username")
    email: str = Field(..., alias="Email")
    role: UserRole = Field(..., alias="Role")
    created_at: datetime = Field(..., alias="CreatedAt")


class UserInDB(UserResponse):
    """User record including the credential hash. Never serialized."""

    password_hash: str = Field(..., exclude=True)


class LoginResponse(BaseModel):
    """Access token issued on login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token expiry in seconds")
    user: UserResponse
