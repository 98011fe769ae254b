"""
Stockroom Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every way a request can be refused.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the API-key dependency; caught by global handlers.

Exception Hierarchy:
    StockroomError (base)
    ├── ValidationError     → 400 Bad Request (missing/blank field, bad role,
    │                                          password rules, negative price)
    ├── UnauthorizedError   → 401 Unauthorized (API-key header missing/wrong)
    ├── ForbiddenError      → 403 Forbidden (acting user lacks the role)
    ├── NotFoundError       → 404 Not Found (unknown id, empty listing)
    ├── ConflictError       → 409 Conflict (duplicate email/name, category
    │                                       still referenced by products)
    └── DatabaseError       → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StockroomError(Exception):
    """
    Base exception for all Stockroom application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info returned as `details` for client errors
                  and only logged for server errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StockroomError):
    """
    Raised when client input fails a business rule.

    HTTP:    400 Bad Request

    Schema-level problems (wrong JSON types, malformed UUIDs) are still
    answered by FastAPI's own 422; this covers the rules services enforce.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(StockroomError):
    """Raised when a route's API-key header is absent or does not match."""

    def __init__(
        self,
        message: str = "Missing or invalid API key",
        header: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if header:
            ctx["header"] = header
        super().__init__(message=message, context=ctx)
        self.header = header


class ForbiddenError(StockroomError):
    """
    Raised when the acting user exists but lacks the required role.

    When:    Creating a user or changing a password with a non-admin
             `last_op_id`.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "The acting user is not allowed to perform this operation",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StockroomError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE with an unknown id, a reference (category_id,
             last_op_id) to a missing row, or listing an empty table.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; services convert that None
    into this exception so routes stay free of existence checks.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(StockroomError):
    """
    Raised when a write would break a uniqueness or reference invariant.

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(StockroomError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Detailed error
        info (SQL, constraint names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
