"""Tests for project service and endpoints."""

import pytest
from httpx import AsyncClient

from bugtracker.core.exceptions import InvalidReferenceError, ValidationError
from bugtracker.repositories import BugRepository, CommentRepository
from bugtracker.schemas.bug import BugResponse
from bugtracker.schemas.comment import CommentResponse
from bugtracker.schemas.project import ProjectResponse
from bugtracker.schemas.user import UserInDB
from bugtracker.services.project import (
    ProjectService,
    parse_project_create,
    parse_project_update,
)
from bugtracker.store import StoreGateway
from bugtracker.utils.validators import Err, Ok


class TestParseProject:
    """Tests for project payload parsing."""

    def test_blank_description_becomes_none(self):
        result = parse_project_create({"ProjectName": " Alpha ", "CreatedBy": 1, "Description": "  "})

        assert isinstance(result, Ok)
        assert result.value.project_name == "Alpha"
        assert result.value.description is None

    def test_blank_name(self):
        result = parse_project_create({"ProjectName": "   ", "CreatedBy": 1})

        assert isinstance(result, Err)
        assert result.code == "EMPTY_TEXT"

    def test_name_too_long(self):
        result = parse_project_create({"ProjectName": "x" * 101, "CreatedBy": 1})

        assert isinstance(result, Err)
        assert result.code == "TEXT_TOO_LONG"

    def test_creator_must_be_number(self):
        result = parse_project_create({"ProjectName": "Alpha", "CreatedBy": "1"})

        assert isinstance(result, Err)
        assert result.code == "INVALID_TYPES"

    def test_update_only_description(self):
        result = parse_project_update({"Description": "new"})

        assert isinstance(result, Ok)
        assert result.value.model_dump(exclude_unset=True) == {"description": "new"}

    def test_update_invalid_name(self):
        result = parse_project_update({"ProjectName": ""})

        assert isinstance(result, Err)
        assert result.code == "INVALID_TEXT"


class TestProjectService:
    """Tests for project orchestration against the store."""

    @pytest.mark.asyncio
    async def test_create_project(self, gateway: StoreGateway, test_user: UserInDB):
        project = await ProjectService(gateway).create_project(
            {"ProjectName": "Alpha", "CreatedBy": test_user.user_id}
        )

        assert project.project_id > 0
        assert project.created_by == test_user.user_id
        assert project.description is None

    @pytest.mark.asyncio
    async def test_create_project_unknown_creator(self, gateway: StoreGateway):
        with pytest.raises(InvalidReferenceError) as exc_info:
            await ProjectService(gateway).create_project({"ProjectName": "Alpha", "CreatedBy": 9999})

        assert exc_info.value.code == "USER_NOT_FOUND"
        assert await ProjectService(gateway).get_all_projects() == []

    @pytest.mark.asyncio
    async def test_update_project(self, gateway: StoreGateway, test_project: ProjectResponse):
        updated = await ProjectService(gateway).update_project(
            test_project.project_id, {"ProjectName": "Renamed"}
        )

        assert updated.project_name == "Renamed"
        assert updated.description == test_project.description

    @pytest.mark.asyncio
    async def test_update_project_no_data(self, gateway: StoreGateway, test_project: ProjectResponse):
        with pytest.raises(ValidationError) as exc_info:
            await ProjectService(gateway).update_project(test_project.project_id, None)

        assert exc_info.value.code == "NO_UPDATE_DATA"

    @pytest.mark.asyncio
    async def test_delete_project_cascades(
        self,
        gateway: StoreGateway,
        test_project: ProjectResponse,
        test_bug: BugResponse,
        test_comment: CommentResponse,
    ):
        service = ProjectService(gateway)

        assert await service.delete_project(test_project.project_id) is True
        assert await service.get_project_by_id(test_project.project_id) is None
        assert await BugRepository(gateway).get_by_id(test_bug.bug_id) is None
        assert await CommentRepository(gateway).get_by_id(test_comment.comment_id) is None
        assert await service.delete_project(test_project.project_id) is False

    @pytest.mark.asyncio
    async def test_projects_by_creator(
        self, gateway: StoreGateway, test_project: ProjectResponse, test_user: UserInDB
    ):
        service = ProjectService(gateway)

        assert await service.get_projects_by_creator(test_project.created_by) == [test_project]
        assert await service.get_projects_by_creator(test_user.user_id) == []


class TestProjectEndpoints:
    """Tests for project endpoints."""

    @pytest.mark.asyncio
    async def test_create_project_success(self, client: AsyncClient, test_user: UserInDB):
        response = await client.post(
            "/projects",
            json={"ProjectName": "Alpha", "Description": "First", "CreatedBy": test_user.user_id},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["ProjectName"] == "Alpha"
        assert data["CreatedBy"] == test_user.user_id
        assert "ProjectID" in data

    @pytest.mark.asyncio
    async def test_create_project_missing_fields(self, client: AsyncClient):
        response = await client.post("/projects", json={"Description": "no name"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_FIELDS"

    @pytest.mark.asyncio
    async def test_list_and_get(self, client: AsyncClient, test_project: ProjectResponse):
        listing = await client.get("/projects")
        single = await client.get(f"/projects/{test_project.project_id}")
        by_creator = await client.get(f"/projects/creator/{test_project.created_by}")

        assert [p["ProjectID"] for p in listing.json()] == [test_project.project_id]
        assert single.json()["ProjectName"] == "Test Project"
        assert len(by_creator.json()) == 1

    @pytest.mark.asyncio
    async def test_get_missing_project(self, client: AsyncClient):
        response = await client.get("/projects/9999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient, test_project: ProjectResponse):
        put_response = await client.put(
            f"/projects/{test_project.project_id}",
            json={"Description": None},
        )
        assert put_response.status_code == 200
        assert put_response.json()["Description"] is None

        delete_response = await client.delete(f"/projects/{test_project.project_id}")
        assert delete_response.status_code == 200

        again = await client.delete(f"/projects/{test_project.project_id}")
        assert again.status_code == 404
