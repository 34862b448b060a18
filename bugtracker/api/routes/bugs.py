"""Bug API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, status

from bugtracker.api.deps import Gateway
from bugtracker.core.exceptions import NotFoundError
from bugtracker.schemas.bug import BugResponse
from bugtracker.schemas.common import MessageResponse
from bugtracker.services.bug import BugService

router = APIRouter()


@router.get("", response_model=list[BugResponse], summary="List bugs")
async def list_bugs(gateway: Gateway) -> list[BugResponse]:
    return await BugService(gateway).get_all_bugs()


@router.post(
    "",
    response_model=BugResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a bug",
    description="Create a bug in an existing project, reported by an existing user.",
)
async def create_bug(gateway: Gateway, payload: Any = Body(None)) -> BugResponse:
    return await BugService(gateway).create_bug(payload)


@router.get("/project/{project_id}", response_model=list[BugResponse], summary="List bugs in a project")
async def list_project_bugs(project_id: str, gateway: Gateway) -> list[BugResponse]:
    return await BugService(gateway).get_bugs_by_project(project_id)


@router.get("/reporter/{user_id}", response_model=list[BugResponse], summary="List bugs reported by a user")
async def list_reported_bugs(user_id: str, gateway: Gateway) -> list[BugResponse]:
    return await BugService(gateway).get_bugs_by_reporter(user_id)


@router.get("/assignee/{user_id}", response_model=list[BugResponse], summary="List bugs assigned to a user")
async def list_assigned_bugs(user_id: str, gateway: Gateway) -> list[BugResponse]:
    return await BugService(gateway).get_bugs_by_assignee(user_id)


@router.get("/{bug_id}", response_model=BugResponse, summary="Get a bug")
async def get_bug(bug_id: str, gateway: Gateway) -> BugResponse:
    bug = await BugService(gateway).get_bug_by_id(bug_id)
    if bug is None:
        raise NotFoundError(resource="Bug")
    return bug


@router.put("/{bug_id}", response_model=BugResponse, summary="Update a bug")
async def update_bug(bug_id: str, gateway: Gateway, payload: Any = Body(None)) -> BugResponse:
    """Update title, description, status, priority or assignee."""
    bug = await BugService(gateway).update_bug(bug_id, payload)
    if bug is None:
        raise NotFoundError(resource="Bug")
    return bug


@router.delete(
    "/{bug_id}",
    response_model=MessageResponse,
    summary="Delete a bug",
    description="Delete a bug together with its comments.",
)
async def delete_bug(bug_id: str, gateway: Gateway) -> MessageResponse:
    if not await BugService(gateway).delete_bug(bug_id):
        raise NotFoundError(resource="Bug")
    return MessageResponse(message="Bug deleted successfully")
