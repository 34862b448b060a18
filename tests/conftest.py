"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

import bugtracker.models  # noqa: F401
from bugtracker.core.security import create_access_token, hash_password
from bugtracker.database import Base, get_gateway
from bugtracker.main import app
from bugtracker.models.bug import BugPriority, BugStatus
from bugtracker.models.user import UserRole
from bugtracker.repositories import (
    BugRepository,
    CommentRepository,
    ProjectRepository,
    UserRepository,
)
from bugtracker.schemas.bug import BugResponse
from bugtracker.schemas.comment import CommentResponse
from bugtracker.schemas.project import ProjectResponse
from bugtracker.schemas.user import UserInDB
from bugtracker.store import StoreGateway


# Test database URL (in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "TestPass123!"


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def gateway(db_engine: AsyncEngine) -> StoreGateway:
    """Create a store gateway over the test engine."""
    return StoreGateway(db_engine)


@pytest_asyncio.fixture
async def client(gateway: StoreGateway) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    app.dependency_overrides[get_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def make_user(
    gateway: StoreGateway,
    username: str,
    email: str,
    role: UserRole = UserRole.DEVELOPER,
    password: str = TEST_PASSWORD,
) -> UserInDB:
    """Insert a user directly through the repository."""
    return await UserRepository(gateway).create(
        {
            "username": username,
            "email": email,
            "password_hash": hash_password(password),
            "role": role,
        }
    )


# Fixture factories for creating test data
@pytest_asyncio.fixture
async def test_user(gateway: StoreGateway) -> UserInDB:
    """Create a test user."""
    return await make_user(gateway, "testuser", "test@example.com")


@pytest_asyncio.fixture
async def test_manager(gateway: StoreGateway) -> UserInDB:
    """Create a test manager user."""
    return await make_user(gateway, "testmanager", "manager@example.com", role=UserRole.MANAGER)


@pytest_asyncio.fixture
async def test_project(gateway: StoreGateway, test_manager: UserInDB) -> ProjectResponse:
    """Create a test project."""
    return await ProjectRepository(gateway).create(
        {
            "project_name": "Test Project",
            "description": "A test project description",
            "created_by": test_manager.user_id,
        }
    )


@pytest_asyncio.fixture
async def test_bug(
    gateway: StoreGateway, test_project: ProjectResponse, test_user: UserInDB
) -> BugResponse:
    """Create a test bug."""
    return await BugRepository(gateway).create(
        {
            "title": "Test Bug",
            "description": "A test bug description",
            "status": BugStatus.OPEN,
            "priority": BugPriority.MEDIUM,
            "project_id": test_project.project_id,
            "reported_by": test_user.user_id,
            "assigned_to": None,
        }
    )


@pytest_asyncio.fixture
async def test_comment(
    gateway: StoreGateway, test_bug: BugResponse, test_user: UserInDB
) -> CommentResponse:
    """Create a test comment."""
    return await CommentRepository(gateway).create(
        {
            "bug_id": test_bug.bug_id,
            "user_id": test_user.user_id,
            "comment_text": "A test comment",
        }
    )


@pytest.fixture
def user_token(test_user: UserInDB) -> str:
    """Create a JWT token for the test user."""
    return create_access_token(user_id=test_user.user_id, role=test_user.role.value)


def auth_header(token: str) -> dict[str, str]:
    """Create an authorization header with the given token."""
    return {"Authorization": f"Bearer {token}"}
