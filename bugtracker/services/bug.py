"""Bug service for bug tracking operations."""

from typing import Any, Optional

import structlog

from bugtracker.core.exceptions import InvalidReferenceError
from bugtracker.models.bug import BugPriority, BugStatus
from bugtracker.repositories.bug import BugRepository
from bugtracker.repositories.comment import CommentRepository
from bugtracker.repositories.project import ProjectRepository
from bugtracker.repositories.user import UserRepository
from bugtracker.schemas.bug import BugCreate, BugResponse, BugUpdate
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import (
    Err,
    Ok,
    ParseResult,
    check_payload,
    check_update_payload,
    clean_text,
    is_int,
    is_optional_int,
    is_optional_text,
    missing_fields,
    parse_id,
    to_enum,
    unwrap,
)

logger = structlog.get_logger()

MAX_TITLE_LENGTH = 200

STATUS_VALUES = ", ".join(s.value for s in BugStatus)
PRIORITY_VALUES = ", ".join(p.value for p in BugPriority)


def _parse_title(value: Any, code: str) -> ParseResult[str]:
    title = clean_text(value) if isinstance(value, str) else None
    if title is None:
        message = "Title cannot be empty" if code == "EMPTY_TEXT" else "Invalid Title: Must be non-empty string"
        return Err(code, message)
    if len(title) > MAX_TITLE_LENGTH:
        return Err("TEXT_TOO_LONG", f"Title cannot exceed {MAX_TITLE_LENGTH} characters")
    return Ok(title)


def _parse_workflow_fields(raw: dict[str, Any], fields: dict[str, Any]) -> Optional[Err]:
    """Parse the optional Status and Priority fields into fields."""
    if "Status" in raw:
        status = to_enum(BugStatus, raw["Status"]) if isinstance(raw["Status"], str) else None
        if status is None:
            return Err("INVALID_STATUS", f"Invalid Status: Must be one of {STATUS_VALUES}")
        fields["status"] = status

    if "Priority" in raw:
        priority = to_enum(BugPriority, raw["Priority"]) if isinstance(raw["Priority"], str) else None
        if priority is None:
            return Err("INVALID_PRIORITY", f"Invalid Priority: Must be one of {PRIORITY_VALUES}")
        fields["priority"] = priority

    return None


def parse_bug_create(raw: Any) -> ParseResult[BugCreate]:
    """Parse an untyped payload into a BugCreate command."""
    failure = check_payload(raw, "bug")
    if failure:
        return failure

    if missing_fields(raw, ("Title", "ProjectID", "ReportedBy")):
        return Err(
            "MISSING_FIELDS",
            "Missing required fields: Title, ProjectID, and ReportedBy are required",
        )

    if not (
        isinstance(raw["Title"], str)
        and is_int(raw["ProjectID"])
        and is_int(raw["ReportedBy"])
        and is_optional_int(raw.get("AssignedTo"))
        and is_optional_text(raw.get("Description"))
    ):
        return Err(
            "INVALID_TYPES",
            "Invalid field types: ProjectID, ReportedBy and AssignedTo must be numbers, "
            "Title and Description must be strings",
        )

    title = _parse_title(raw["Title"], "EMPTY_TEXT")
    if isinstance(title, Err):
        return title

    fields: dict[str, Any] = {
        "title": title.value,
        "project_id": raw["ProjectID"],
        "reported_by": raw["ReportedBy"],
        "assigned_to": raw.get("AssignedTo"),
        "description": clean_text(raw["Description"]) if raw.get("Description") is not None else None,
    }
    failure = _parse_workflow_fields(raw, fields)
    if failure:
        return failure

    return Ok(BugCreate(**fields))


def parse_bug_update(raw: Any) -> ParseResult[BugUpdate]:
    """Parse a partial update; omitted fields are left unchanged."""
    failure = check_update_payload(raw)
    if failure:
        return failure

    fields: dict[str, Any] = {}

    if "Title" in raw:
        title = _parse_title(raw["Title"], "INVALID_TEXT")
        if isinstance(title, Err):
            return title
        fields["title"] = title.value

    if "Description" in raw:
        if not is_optional_text(raw["Description"]):
            return Err("INVALID_TYPES", "Invalid Description: Must be string or null")
        description = raw["Description"]
        fields["description"] = clean_text(description) if description is not None else None

    if "AssignedTo" in raw:
        if not is_optional_int(raw["AssignedTo"]):
            return Err("INVALID_TYPES", "Invalid AssignedTo: Must be number or null")
        fields["assigned_to"] = raw["AssignedTo"]

    failure = _parse_workflow_fields(raw, fields)
    if failure:
        return failure

    return Ok(BugUpdate(**fields))


class BugService:
    """Service for bug operations."""

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway
        self.bugs = BugRepository(gateway)

    async def get_all_bugs(self) -> list[BugResponse]:
        return await self.bugs.get_all()

    async def get_bug_by_id(self, bug_id: Any) -> Optional[BugResponse]:
        return await self.bugs.get_by_id(unwrap(parse_id(bug_id, "bug ID")))

    async def get_bugs_by_project(self, project_id: Any) -> list[BugResponse]:
        return await self.bugs.get_by_project(unwrap(parse_id(project_id, "project ID")))

    async def get_bugs_by_reporter(self, user_id: Any) -> list[BugResponse]:
        return await self.bugs.get_by_reporter(unwrap(parse_id(user_id, "user ID")))

    async def get_bugs_by_assignee(self, user_id: Any) -> list[BugResponse]:
        return await self.bugs.get_by_assignee(unwrap(parse_id(user_id, "user ID")))

    async def create_bug(self, raw: Any) -> BugResponse:
        """
        Validate and create a bug.

        Args:
            raw: Untyped payload with Title, ProjectID, ReportedBy and optional
                Description, Status, Priority, AssignedTo

        Returns:
            The persisted bug

        Raises:
            ValidationError: If the payload is invalid
            InvalidReferenceError: If the project, reporter or assignee does not exist
        """
        data = unwrap(parse_bug_create(raw))

        async with self.gateway.transaction() as tx:
            if await ProjectRepository(tx).get_by_id(data.project_id) is None:
                logger.warning("bug_rejected", reason="project_not_found", project_id=data.project_id)
                raise InvalidReferenceError(resource="Project")

            users = UserRepository(tx)
            if await users.get_by_id(data.reported_by) is None:
                logger.warning("bug_rejected", reason="reporter_not_found", user_id=data.reported_by)
                raise InvalidReferenceError(resource="User", field="ReportedBy")

            if data.assigned_to is not None and await users.get_by_id(data.assigned_to) is None:
                logger.warning("bug_rejected", reason="assignee_not_found", user_id=data.assigned_to)
                raise InvalidReferenceError(resource="User", field="AssignedTo")

            bug = await BugRepository(tx).create(data.model_dump())

        logger.info("bug_created", bug_id=bug.bug_id, project_id=bug.project_id)
        return bug

    async def update_bug(self, bug_id: Any, raw: Any) -> Optional[BugResponse]:
        """
        Apply a partial update to a bug.

        Returns:
            The updated bug, or None if no bug has that ID

        Raises:
            ValidationError: If the id or payload is invalid
            InvalidReferenceError: If a supplied assignee does not exist
        """
        entity_id = unwrap(parse_id(bug_id, "bug ID"))
        data = unwrap(parse_bug_update(raw))
        fields = data.model_dump(exclude_unset=True)

        async with self.gateway.transaction() as tx:
            assignee = fields.get("assigned_to")
            if assignee is not None and await UserRepository(tx).get_by_id(assignee) is None:
                logger.warning("bug_rejected", reason="assignee_not_found", user_id=assignee)
                raise InvalidReferenceError(resource="User", field="AssignedTo")

            bug = await BugRepository(tx).update(entity_id, fields)

        if bug is not None:
            logger.info("bug_updated", bug_id=entity_id, fields=sorted(fields))
        return bug

    async def delete_bug(self, bug_id: Any) -> bool:
        """
        Delete a bug and its comments in one transaction.

        Returns:
            True iff the bug existed
        """
        entity_id = unwrap(parse_id(bug_id, "bug ID"))

        async with self.gateway.transaction() as tx:
            comment_count = await CommentRepository(tx).delete_by_bug(entity_id)
            deleted = await BugRepository(tx).delete(entity_id)

        if deleted:
            logger.info("bug_deleted", bug_id=entity_id, comments_deleted=comment_count)
        return deleted
