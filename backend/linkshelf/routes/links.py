"""
LinkShelf Backend — Link Route Handlers
=========================================

What:  CRUD endpoints for /api/links.
How:   Parse the JSON body, delegate to LinkService, return JSON.
Who:   Called by the bookmark front-end.

Bodies are optional at the FastAPI level (`= None`): an empty POST body
must produce the same 400 "Missing required fields" as a body without
`url`, not a schema error.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.database import get_db_session
from linkshelf.schemas.common import ErrorResponse, MessageResponse
from linkshelf.schemas.link import LinkCreate, LinkResponse, LinkUpdate
from linkshelf.services.link_service import link_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Links"])


@router.get(
    "/links",
    response_model=List[LinkResponse],
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List all links, newest first",
)
async def list_links(db: AsyncSession = Depends(get_db_session)) -> List[LinkResponse]:
    """Ordered by `created` descending, compared as strings."""
    return await link_service.list_links(db)


@router.get(
    "/links/{link_id}",
    response_model=LinkResponse,
    responses={
        404: {"description": "Link not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a single link by id",
)
async def get_link(link_id: str, db: AsyncSession = Depends(get_db_session)) -> LinkResponse:
    return await link_service.get_link(db, link_id)


@router.post(
    "/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "id, url or created missing", "model": ErrorResponse},
        500: {"description": "Storage error (including duplicate id)", "model": ErrorResponse},
    },
    summary="Create a link with a client-supplied id",
)
async def create_link(
    payload: Optional[LinkCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> LinkResponse:
    """
    Create a link.

    notes and folder default to "", tags to []. The response echoes the
    stored values.
    """
    return await link_service.create_link(db, payload)


@router.put(
    "/links/{link_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Link not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Replace url, notes, folder and tags of a link",
)
async def update_link(
    link_id: str,
    payload: Optional[LinkUpdate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    Full overwrite of the four mutable fields.

    Fields missing from the body are cleared, not preserved.
    """
    await link_service.update_link(db, link_id, payload)
    return MessageResponse(message="Link updated successfully")


@router.delete(
    "/links/{link_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Link not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Delete a link",
)
async def delete_link(link_id: str, db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    await link_service.delete_link(db, link_id)
    return MessageResponse(message="Link deleted successfully")
