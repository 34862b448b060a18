"""User repository."""

from typing import Optional

from sqlalchemy import func, select

from bugtracker.models.user import User
from bugtracker.repositories.base import BaseRepository, UpdateBuilder
from bugtracker.schemas.user import UserInDB


class UserRepository(BaseRepository[UserInDB]):
    """Statements over the users table."""

    table = User.__table__
    primary_key = "user_id"
    record = UserInDB
    updatable = ("username", "email")

    async def get_by_username(self, username: str) -> Optional[UserInDB]:
        """Get a user by exact username."""
        return await self._fetch_one(
            select(self.table).where(self.table.c.username == username)
        )

    async def get_by_email(self, email: str) -> Optional[UserInDB]:
        """Get a user by email, ignoring case."""
        return await self._fetch_one(
            select(self.table).where(func.lower(self.table.c.email) == email.lower())
        )

    async def update_password(self, user_id: int, password_hash: str) -> Optional[UserInDB]:
        """Replace the stored credential hash."""
        statement = (
            UpdateBuilder(self.table)
            .set("password_hash", password_hash)
            .build(self.key_column, user_id)
        )
        return await self._fetch_one(statement)
