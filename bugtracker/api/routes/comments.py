"""Comment API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, status

from bugtracker.api.deps import Gateway
from bugtracker.core.exceptions import NotFoundError
from bugtracker.schemas.comment import CommentResponse
from bugtracker.schemas.common import DeletedCountResponse, MessageResponse
from bugtracker.services.comment import CommentService

router = APIRouter()


@router.get(
    "",
    response_model=list[CommentResponse],
    summary="List comments",
    description="Get every comment, newest first.",
)
async def list_comments(gateway: Gateway) -> list[CommentResponse]:
    return await CommentService(gateway).get_all_comments()


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a bug",
)
async def create_comment(gateway: Gateway, payload: Any = Body(None)) -> CommentResponse:
    """Create a comment after checking the bug and user exist."""
    return await CommentService(gateway).create_comment(payload)


@router.get(
    "/bug/{bug_id}",
    response_model=list[CommentResponse],
    summary="List comments on a bug",
    description="Get a bug's comments, oldest first.",
)
async def list_bug_comments(bug_id: str, gateway: Gateway) -> list[CommentResponse]:
    return await CommentService(gateway).get_comments_by_bug(bug_id)


@router.get(
    "/user/{user_id}",
    response_model=list[CommentResponse],
    summary="List comments by a user",
    description="Get a user's comments, newest first.",
)
async def list_user_comments(user_id: str, gateway: Gateway) -> list[CommentResponse]:
    return await CommentService(gateway).get_comments_by_user(user_id)


@router.delete(
    "/bug/{bug_id}",
    response_model=DeletedCountResponse,
    summary="Delete all comments on a bug",
)
async def delete_bug_comments(bug_id: str, gateway: Gateway) -> DeletedCountResponse:
    count = await CommentService(gateway).delete_comments_by_bug(bug_id)
    return DeletedCountResponse(deleted_count=count)


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Get a comment",
)
async def get_comment(comment_id: str, gateway: Gateway) -> CommentResponse:
    comment = await CommentService(gateway).get_comment_by_id(comment_id)
    if comment is None:
        raise NotFoundError(resource="Comment")
    return comment


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Update a comment",
)
async def update_comment(
    comment_id: str,
    gateway: Gateway,
    payload: Any = Body(None),
) -> CommentResponse:
    comment = await CommentService(gateway).update_comment(comment_id, payload)
    if comment is None:
        raise NotFoundError(resource="Comment")
    return comment


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment",
)
async def delete_comment(comment_id: str, gateway: Gateway) -> MessageResponse:
    if not await CommentService(gateway).delete_comment(comment_id):
        raise NotFoundError(resource="Comment")
    return MessageResponse(message="Comment deleted successfully")
