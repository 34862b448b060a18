"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from bugtracker import __version__
from bugtracker.api.deps import Gateway
from bugtracker.api.router import router as api_router
from bugtracker.config import settings
from bugtracker.core.exceptions import APIException
from bugtracker.core.logging import configure_logging
from bugtracker.database import close_db, init_db
from bugtracker.middleware.audit_logger import AuditLogMiddleware
from bugtracker.middleware.request_id import RequestIDMiddleware
from bugtracker.schemas.common import HealthResponse

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events handler."""
    await init_db()
    logger.info("application_started", env=settings.app_env, port=settings.port)
    yield
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Bug tracking API for users, projects, bugs and comments.",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)


# Request size limiting middleware
class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Middleware to limit request body size."""

    MAX_SIZE = 1 * 1024 * 1024  # 1MB

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.MAX_SIZE:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "error": {
                        "code": "REQUEST_TOO_LARGE",
                        "message": f"Request body too large. Maximum size is {self.MAX_SIZE // 1024}KB.",
                    }
                },
            )
        return await call_next(request)


# Add middleware (last added is outermost)
app.add_middleware(AuditLogMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(RequestSizeLimitMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


# Exception handlers
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handle custom API exceptions."""
    content = exc.detail
    if hasattr(request.state, "request_id") and isinstance(content, dict) and "error" in content:
        content = {"error": {**content["error"], "request_id": request.state.request_id}}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing errors raised before a service runs."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
        })

    content = {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": errors,
        }
    }

    if hasattr(request.state, "request_id"):
        content["error"]["request_id"] = request.state.request_id

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=content,
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "unhandled_exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        request_id=getattr(request.state, "request_id", None),
    )

    content = {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }
    }

    if hasattr(request.state, "request_id"):
        content["error"]["request_id"] = request.state.request_id

    # Include details in debug mode
    if settings.debug:
        content["error"]["details"] = [
            {"type": type(exc).__name__, "message": str(exc)}
        ]

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


# Include API routers
app.include_router(api_router, prefix=settings.api_prefix)


# Health check endpoints
@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.get(
    "/health/ready",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Readiness probe",
)
async def readiness_check(gateway: Gateway) -> JSONResponse:
    """Readiness probe - checks database connectivity."""
    db_status = "healthy"
    try:
        await gateway.ping()
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    healthy = db_status == "healthy"
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        database=db_status,
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )


@app.get(
    "/health/live",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Liveness probe",
)
async def liveness_check() -> HealthResponse:
    """Liveness probe - basic check that the application is running."""
    return HealthResponse(
        status="alive",
        version=__version__,
    )


# Root endpoint
@app.get("/", include_in_schema=False)
async def root() -> dict:
    """Root endpoint with API information."""
    prefix = settings.api_prefix
    return {
        "name": settings.app_name,
        "version": __version__,
        "message": "Bug Tracker API is running",
        "docs": "/docs" if settings.debug else None,
        "health": "/health",
        "endpoints": {
            "users": f"{prefix}/users",
            "projects": f"{prefix}/projects",
            "bugs": f"{prefix}/bugs",
            "comments": f"{prefix}/comments",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bugtracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
