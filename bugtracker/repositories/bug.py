"""Bug repository."""

from sqlalchemy import func, select

from bugtracker.models.bug import Bug
from bugtracker.repositories.base import BaseRepository, UpdateBuilder
from bugtracker.schemas.bug import BugResponse


class BugRepository(BaseRepository[BugResponse]):
    """Statements over the bugs table."""

    table = Bug.__table__
    primary_key = "bug_id"
    record = BugResponse
    updatable = ("title", "description", "status", "priority", "assigned_to")

    async def get_by_project(self, project_id: int) -> list[BugResponse]:
        """Get a project's bugs, newest first."""
        return await self._get_by("project_id", project_id)

    async def get_by_reporter(self, user_id: int) -> list[BugResponse]:
        """Get bugs reported by a user, newest first."""
        return await self._get_by("reported_by", user_id)

    async def get_by_assignee(self, user_id: int) -> list[BugResponse]:
        """Get bugs assigned to a user, newest first."""
        return await self._get_by("assigned_to", user_id)

    async def get_ids_by_project(self, project_id: int) -> list[int]:
        """Get the ids of a project's bugs."""
        result = await self.gateway.execute(
            select(self.key_column).where(self.table.c.project_id == project_id)
        )
        return [row["bug_id"] for row in result.rows]

    async def delete_by_project(self, project_id: int) -> int:
        """Delete all bugs of a project and return how many were removed."""
        return await self._delete_by("project_id", project_id)

    def _stamp(self, builder: UpdateBuilder) -> None:
        builder.set("updated_at", func.now())
