"""
Stockroom Backend — Shared Response Schemas
=============================================

What:  Response models used by every resource: the error body, the plain
       message body returned by deletes, and the health report.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Column widths of the String columns the request fields end up in
NAME_MAX_LENGTH = 255
ROLE_MAX_LENGTH = 50


class MessageResponse(BaseModel):
    """Returned by DELETE endpoints and the password change."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "A user with this email already exists",
            "details": {"field": "email"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
