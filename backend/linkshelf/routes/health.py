"""
LinkShelf Backend — Health Check Route
========================================

What:  Liveness endpoint for monitoring and platform health probes.
How:   Returns a fixed status and the current server time.

The check deliberately stays inside the process: it never queries the
database, so it cannot fail while the server is up.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from linkshelf.schemas.common import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


def utc_timestamp() -> str:
    """ISO 8601 UTC with millisecond precision and a `Z` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=utc_timestamp())
