"""
LinkShelf Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": <message>}` with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    LinkShelfError (base)
    ├── ValidationError  → 400 Bad Request (required field missing)
    ├── NotFoundError    → 404 Not Found (no row matched the id)
    ├── ConflictError    → 409 Conflict (duplicate folder name)
    └── DatabaseError    → 500 Internal Server Error (any other storage failure)

Routes never build error responses themselves; they let these propagate.
"""

from typing import Any, Dict, Optional


class LinkShelfError(Exception):
    """
    Base exception for all LinkShelf application errors.

    Attributes:
        message:  Error description returned in the `error` field of the response
        context:  Additional debug info (logged, not returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LinkShelfError):
    """
    Raised when a request body lacks a required field.

    When:    POST /api/links without id/url/created, POST /api/folders without name.
    HTTP:    400 Bad Request

    Only presence is checked; values are never validated for format
    (a `created` of "yesterday" is accepted and sorted as a string).
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = list(fields)
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class NotFoundError(LinkShelfError):
    """
    Raised when an operation targets an id that matches no row.

    When:    GET/PUT/DELETE /api/links/{id} with an unknown id.
    HTTP:    404 Not Found

    For updates and deletes this is derived from the affected row count,
    so no separate existence query is issued.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(LinkShelfError):
    """
    Raised when an insert collides with a uniqueness constraint the API exposes.

    When:    POST /api/folders with a name that already exists.
    HTTP:    409 Conflict

    Duplicate link ids are NOT reported through this class; they surface
    as DatabaseError like any other storage failure.
    """

    status_code = 409

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(LinkShelfError):
    """
    Raised when a database statement fails for any reason not mapped above.

    When:    Connection lost, constraint violation, duplicate link id, etc.
    HTTP:    500 Internal Server Error

    The message is the database driver's own wording, returned to the
    caller unchanged. The exception type is kept in `context` for logs.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
