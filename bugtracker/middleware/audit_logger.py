"""Audit logging middleware."""

import time
from typing import Mapping

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

# Query parameters to mask in logs
SENSITIVE_PARAMS = {
    "password",
    "token",
    "access_token",
}


def mask_sensitive(params: Mapping[str, str]) -> dict[str, str]:
    """Mask sensitive query parameters."""
    return {
        key: "***MASKED***" if key.lower() in SENSITIVE_PARAMS else value
        for key, value in params.items()
    }


class AuditLogMiddleware(BaseHTTPMiddleware):
    """
    Middleware for audit logging of API requests.

    Logs the request line on entry and the status and timing on exit,
    at a level chosen from the status code.
    """

    # Paths to exclude from detailed logging
    EXCLUDED_PATHS = {
        "/health",
        "/health/ready",
        "/health/live",
    }

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Log request and response details."""
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        request_id = getattr(request.state, "request_id", None)

        logger.info(
            "request_started",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            query_params=mask_sensitive(request.query_params),
            client_ip=self._get_client_ip(request),
            user_agent=request.headers.get("User-Agent", "unknown"),
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response_context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "user_id": getattr(request.state, "user_id", None),
        }

        # Determine log level based on status code
        if response.status_code >= 500:
            logger.error("request_completed", **response_context)
        elif response.status_code >= 400:
            logger.warning("request_completed", **response_context)
        else:
            logger.info("request_completed", **response_context)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Get the client IP address from the request."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
