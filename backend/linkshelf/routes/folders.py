"""
LinkShelf Backend — Folder Route Handlers
===========================================

What:  GET /api/folders (names, ascending) and POST /api/folders.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.database import get_db_session
from linkshelf.schemas.common import ErrorResponse
from linkshelf.schemas.folder import FolderCreate, FolderResponse
from linkshelf.services.folder_service import folder_service

router = APIRouter(prefix="/api", tags=["Folders"])


@router.get(
    "/folders",
    response_model=List[str],
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List folder names",
)
async def list_folders(db: AsyncSession = Depends(get_db_session)) -> List[str]:
    return await folder_service.list_folders(db)


@router.post(
    "/folders",
    response_model=FolderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "name missing", "model": ErrorResponse},
        409: {"description": "Folder already exists", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Create a folder",
)
async def create_folder(
    payload: Optional[FolderCreate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.create_folder(db, payload)
