"""Project repository."""

from bugtracker.models.project import Project
from bugtracker.repositories.base import BaseRepository
from bugtracker.schemas.project import ProjectResponse


class ProjectRepository(BaseRepository[ProjectResponse]):
    """Statements over the projects table."""

    table = Project.__table__
    primary_key = "project_id"
    record = ProjectResponse
    updatable = ("project_name", "description")

    async def get_by_creator(self, user_id: int) -> list[ProjectResponse]:
        """Get projects created by a user, newest first."""
        return await self._get_by("created_by", user_id)
