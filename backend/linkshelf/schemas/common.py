"""
LinkShelf Backend — Shared Response Schemas
=============================================

What:  Response models used by more than one route module.
Why:   Keeps the error and message formats identical across endpoints,
       and documents them in the generated OpenAPI schema.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error format for every non-2xx response.

    Example:
        {"error": "Link not found"}
    """
    error: str = Field(description="Human-readable error description")


class MessageResponse(BaseModel):
    """Acknowledgement returned by PUT and DELETE on /api/links/{id}."""
    message: str = Field(description="Human-readable result description")


class HealthResponse(BaseModel):
    """
    What:  Liveness response for GET /api/health.

    The endpoint does not touch the database; it only proves the process
    is serving requests.
    """
    status: str = Field(description='Always "ok"')
    timestamp: str = Field(description="Current server time, ISO 8601 UTC")
