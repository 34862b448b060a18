"""Middleware components for the application."""

from bugtracker.middleware.audit_logger import AuditLogMiddleware
from bugtracker.middleware.request_id import RequestIDMiddleware

__all__ = [
    "AuditLogMiddleware",
    "RequestIDMiddleware",
]
