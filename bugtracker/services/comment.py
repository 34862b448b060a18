"""Comment service: validation, reference checks and orchestration."""

from typing import Any, Optional

import structlog

from bugtracker.core.exceptions import InvalidReferenceError
from bugtracker.repositories.bug import BugRepository
from bugtracker.repositories.comment import CommentRepository
from bugtracker.repositories.user import UserRepository
from bugtracker.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import (
    Err,
    Ok,
    ParseResult,
    check_payload,
    check_update_payload,
    clean_text,
    is_int,
    missing_fields,
    parse_id,
    unwrap,
)

logger = structlog.get_logger()

REQUIRED_FIELDS = ("BugID", "UserID", "CommentText")


def parse_comment_create(raw: Any) -> ParseResult[CommentCreate]:
    """
    Parse an untyped payload into a CommentCreate command.

    Checks run in order: payload present, required fields present, field
    types, then non-blank text after trimming.
    """
    failure = check_payload(raw, "comment")
    if failure:
        return failure

    if missing_fields(raw, REQUIRED_FIELDS):
        return Err(
            "MISSING_FIELDS",
            "Missing required fields: BugID, UserID, and CommentText are required",
        )

    bug_id, user_id, text = raw["BugID"], raw["UserID"], raw["CommentText"]
    if not (is_int(bug_id) and is_int(user_id) and isinstance(text, str)):
        return Err(
            "INVALID_TYPES",
            "Invalid field types: BugID and UserID must be numbers, CommentText must be string",
        )

    comment_text = clean_text(text)
    if comment_text is None:
        return Err("EMPTY_TEXT", "CommentText cannot be empty")

    return Ok(CommentCreate(bug_id=bug_id, user_id=user_id, comment_text=comment_text))


def parse_comment_update(raw: Any) -> ParseResult[CommentUpdate]:
    """Parse a partial update; an omitted CommentText leaves the text unchanged."""
    failure = check_update_payload(raw)
    if failure:
        return failure

    if "CommentText" not in raw:
        return Ok(CommentUpdate())

    text = raw["CommentText"]
    comment_text = clean_text(text) if isinstance(text, str) else None
    if comment_text is None:
        return Err("INVALID_TEXT", "Invalid CommentText: Must be non-empty string")

    return Ok(CommentUpdate(comment_text=comment_text))


class CommentService:
    """Service for comment operations."""

    def __init__(self, gateway: StoreGateway):
        self.gateway = gateway
        self.comments = CommentRepository(gateway)

    async def get_all_comments(self) -> list[CommentResponse]:
        """Get every comment, newest first."""
        return await self.comments.get_all()

    async def get_comment_by_id(self, comment_id: Any) -> Optional[CommentResponse]:
        """Get a comment by ID, or None if it does not exist."""
        return await self.comments.get_by_id(unwrap(parse_id(comment_id, "comment ID")))

    async def get_comments_by_bug(self, bug_id: Any) -> list[CommentResponse]:
        """Get a bug's comments oldest first; an unknown bug yields an empty list."""
        return await self.comments.get_by_bug(unwrap(parse_id(bug_id, "bug ID")))

    async def get_comments_by_user(self, user_id: Any) -> list[CommentResponse]:
        """Get a user's comments newest first; an unknown user yields an empty list."""
        return await self.comments.get_by_user(unwrap(parse_id(user_id, "user ID")))

    async def create_comment(self, raw: Any) -> CommentResponse:
        """
        Validate and create a comment.

        Args:
            raw: Untyped request payload with BugID, UserID and CommentText

        Returns:
            The persisted comment with server-assigned id and timestamp

        Raises:
            ValidationError: If the payload is missing, mistyped or blank
            InvalidReferenceError: If the bug or user does not exist
        """
        data = unwrap(parse_comment_create(raw))

        # Reference checks and insert share one transaction
        async with self.gateway.transaction() as tx:
            if await BugRepository(tx).get_by_id(data.bug_id) is None:
                logger.warning("comment_rejected", reason="bug_not_found", bug_id=data.bug_id)
                raise InvalidReferenceError(resource="Bug")

            if await UserRepository(tx).get_by_id(data.user_id) is None:
                logger.warning("comment_rejected", reason="user_not_found", user_id=data.user_id)
                raise InvalidReferenceError(resource="User")

            comment = await CommentRepository(tx).create(data.model_dump())

        logger.info("comment_created", comment_id=comment.comment_id, bug_id=comment.bug_id)
        return comment

    async def update_comment(self, comment_id: Any, raw: Any) -> Optional[CommentResponse]:
        """
        Apply a partial update to a comment.

        Returns:
            The updated comment, or None if no comment has that ID

        Raises:
            ValidationError: If the id or payload is invalid, or nothing
                updatable was supplied
        """
        entity_id = unwrap(parse_id(comment_id, "comment ID"))
        data = unwrap(parse_comment_update(raw))

        comment = await self.comments.update(entity_id, data.model_dump(exclude_unset=True))
        if comment is not None:
            logger.info("comment_updated", comment_id=entity_id)
        return comment

    async def delete_comment(self, comment_id: Any) -> bool:
        """Delete a comment. True iff it existed."""
        entity_id = unwrap(parse_id(comment_id, "comment ID"))
        deleted = await self.comments.delete(entity_id)
        if deleted:
            logger.info("comment_deleted", comment_id=entity_id)
        return deleted

    async def delete_comments_by_bug(self, bug_id: Any) -> int:
        """Delete every comment on a bug and return the count."""
        entity_id = unwrap(parse_id(bug_id, "bug ID"))
        count = await self.comments.delete_by_bug(entity_id)
        logger.info("comments_deleted", bug_id=entity_id, count=count)
        return count
