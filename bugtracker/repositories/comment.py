"""Comment repository."""

from bugtracker.models.comment import Comment
from bugtracker.repositories.base import BaseRepository
from bugtracker.schemas.comment import CommentResponse


class CommentRepository(BaseRepository[CommentResponse]):
    """Statements over the comments table."""

    table = Comment.__table__
    primary_key = "comment_id"
    record = CommentResponse
    updatable = ("comment_text",)

    async def get_by_bug(self, bug_id: int) -> list[CommentResponse]:
        """Get a bug's comments in conversation order (oldest first)."""
        return await self._get_by("bug_id", bug_id, descending=False)

    async def get_by_user(self, user_id: int) -> list[CommentResponse]:
        """Get a user's comments, newest first."""
        return await self._get_by("user_id", user_id)

    async def delete_by_bug(self, bug_id: int) -> int:
        """Delete all comments on a bug and return how many were removed."""
        return await self._delete_by("bug_id", bug_id)
