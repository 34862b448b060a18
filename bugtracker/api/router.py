"""API router combining all endpoint routers."""

from fastapi import APIRouter

from bugtracker.api.routes import bugs, comments, projects, users
from bugtracker.schemas.common import ErrorResponse

# Error envelopes shared by every resource router
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation or reference failure"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}

router = APIRouter(responses=ERROR_RESPONSES)

# Include all routers
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(bugs.router, prefix="/bugs", tags=["Bugs"])
router.include_router(comments.router, prefix="/comments", tags=["Comments"])
