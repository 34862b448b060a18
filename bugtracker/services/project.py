"""Project service for project management operations."""

from typing import Any, Optional

import structlog

from bugtracker.core.exceptions import InvalidReferenceError
from bugtracker.repositories.bug import BugRepository
from bugtracker.repositories.comment import CommentRepository
from bugtracker.repositories.project import ProjectRepository
from bugtracker.repositories.user import UserRepository
from bugtracker.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import (
    Err,
    Ok,
    ParseResult,
    check_payload,
    check_update_payload,
    clean_text,
    is_int,
    is_optional_text,
    missing_fields,
    parse_id,
    unwrap,
)

logger = structlog.get_logger()

MAX_NAME_LENGTH = 100


def _parse_description(value: Optional[str]) -> Optional[str]:
    return clean_text(value) if value is not None else None


def parse_project_create(raw: Any) -> ParseResult[ProjectCreate]:
    """Parse an untyped payload into a ProjectCreate command."""
    failure = check_payload(raw, "project")
    if failure:
        return failure

    if missing_fields(raw, ("ProjectName", "CreatedBy")):
        return Err(
            "MISSING_FIELDS",
            "Missing required fields: ProjectName and CreatedBy are required",
        )

    name, created_by = raw["ProjectName"], raw["CreatedBy"]
    description = raw.get("Description")
    if not (isinstance(name, str) and is_int(created_by) and is_optional_text(description)):
        return Err(
            "INVALID_TYPES",
            "Invalid field types: ProjectName must be string, CreatedBy must be number, "
            "Description must be string or null",
        )

    project_name = clean_text(name)
    if project_name is None:
        return Err("EMPTY_TEXT", "ProjectName cannot be empty")
    if len(project_name) > MAX_NAME_LENGTH:
        return Err("TEXT_TOO_LONG", f"ProjectName cannot exceed {MAX_NAME_LENGTH} characters")

    return Ok(
        ProjectCreate(
            project_name=project_name,
            description=_parse_description(description),
            created_by=created_by,
        )
    )


def parse_project_update(raw: Any) -> ParseResult[ProjectUpdate]:
    """Parse a partial update over ProjectName and Description."""
    failure = check_update_payload(raw)
    if failure:
        return failure

    fields: dict[str, Any] = {}

    if "ProjectName" in raw:
        name = raw["ProjectName"]
        project_name = clean_text(name) if isinstance(name, str) else None
        if project_name is None:
            return Err("INVALID_TEXT", "Invalid ProjectName: Must be non-empty string")
        if len(project_name) > MAX_NAME_LENGTH:
            return Err("TEXT_TOO_LONG", f"ProjectName cannot exceed {MAX_NAME_LENGTH} characters")
        fields["project_name"] = project_name

    if "Description" in raw:
        if not is_optional_text(raw["Description"]):
            return Err("INVALID_TYPES", "Invalid Description: Must be string or null")
        fields["description"] = _parse_description(raw["Description"])

    return Ok(ProjectUpdate(**fields))


class ProjectService:
    """Service for project operations."""

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway
        self.projects = ProjectRepository(gateway)

    async def get_all_projects(self) -> list[ProjectResponse]:
        """Get every project, newest first."""
        return await self.projects.get_all()

    async def get_project_by_id(self, project_id: Any) -> Optional[ProjectResponse]:
        """Get a project by ID, or None if it does not exist."""
        return await self.projects.get_by_id(unwrap(parse_id(project_id, "project ID")))

    async def get_projects_by_creator(self, user_id: Any) -> list[ProjectResponse]:
        """Get projects created by a user, newest first."""
        return await self.projects.get_by_creator(unwrap(parse_id(user_id, "user ID")))

    async def create_project(self, raw: Any) -> ProjectResponse:
        """
        Validate and create a project.

        Args:
            raw: Untyped payload with ProjectName, CreatedBy and optional Description

        Returns:
            The persisted project

        Raises:
            ValidationError: If the payload is invalid
            InvalidReferenceError: If the creator does not exist
        """
        data = unwrap(parse_project_create(raw))

        async with self.gateway.transaction() as tx:
            if await UserRepository(tx).get_by_id(data.created_by) is None:
                logger.warning("project_rejected", reason="user_not_found", user_id=data.created_by)
                raise InvalidReferenceError(resource="User", field="CreatedBy")

            project = await ProjectRepository(tx).create(data.model_dump())

        logger.info("project_created", project_id=project.project_id)
        return project

    async def update_project(self, project_id: Any, raw: Any) -> Optional[ProjectResponse]:
        """
        Apply a partial update to a project.

        Returns:
            The updated project, or None if no project has that ID
        """
        entity_id = unwrap(parse_id(project_id, "project ID"))
        data = unwrap(parse_project_update(raw))

        project = await self.projects.update(entity_id, data.model_dump(exclude_unset=True))
        if project is not None:
            logger.info("project_updated", project_id=entity_id)
        return project

    async def delete_project(self, project_id: Any) -> bool:
        """
        Delete a project together with its bugs and their comments.

        Returns:
            True iff the project existed
        """
        entity_id = unwrap(parse_id(project_id, "project ID"))

        async with self.gateway.transaction() as tx:
            bugs = BugRepository(tx)
            comments = CommentRepository(tx)

            comment_count = 0
            for bug_id in await bugs.get_ids_by_project(entity_id):
                comment_count += await comments.delete_by_bug(bug_id)
            bug_count = await bugs.delete_by_project(entity_id)
            deleted = await ProjectRepository(tx).delete(entity_id)

        if deleted:
            logger.info(
                "project_deleted",
                project_id=entity_id,
                bugs_deleted=bug_count,
                comments_deleted=comment_count,
            )
        return deleted
