"""Project API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, status

from bugtracker.api.deps import Gateway
from bugtracker.core.exceptions import NotFoundError
from bugtracker.schemas.common import MessageResponse
from bugtracker.schemas.project import ProjectResponse
from bugtracker.services.project import ProjectService

router = APIRouter()


@router.get("", response_model=list[ProjectResponse], summary="List projects")
async def list_projects(gateway: Gateway) -> list[ProjectResponse]:
    return await ProjectService(gateway).get_all_projects()


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(gateway: Gateway, payload: Any = Body(None)) -> ProjectResponse:
    return await ProjectService(gateway).create_project(payload)


@router.get(
    "/creator/{user_id}",
    response_model=list[ProjectResponse],
    summary="List projects created by a user",
)
async def list_creator_projects(user_id: str, gateway: Gateway) -> list[ProjectResponse]:
    return await ProjectService(gateway).get_projects_by_creator(user_id)


@router.get("/{project_id}", response_model=ProjectResponse, summary="Get a project")
async def get_project(project_id: str, gateway: Gateway) -> ProjectResponse:
    project = await ProjectService(gateway).get_project_by_id(project_id)
    if project is None:
        raise NotFoundError(resource="Project")
    return project


@router.put("/{project_id}", response_model=ProjectResponse, summary="Update a project")
async def update_project(
    project_id: str,
    gateway: Gateway,
    payload: Any = Body(None),
) -> ProjectResponse:
    project = await ProjectService(gateway).update_project(project_id, payload)
    if project is None:
        raise NotFoundError(resource="Project")
    return project


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete a project",
    description="Delete a project with all of its bugs and their comments.",
)
async def delete_project(project_id: str, gateway: Gateway) -> MessageResponse:
    if not await ProjectService(gateway).delete_project(project_id):
        raise NotFoundError(resource="Project")
    return MessageResponse(message="Project deleted successfully")
