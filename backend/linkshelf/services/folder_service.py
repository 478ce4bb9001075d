"""
LinkShelf Backend — Folder Service
====================================

What:  Listing and creating folder names.
How:   One statement per call. Duplicate names are detected by the
       database's UNIQUE constraint, not by a lookup before the insert,
       so two concurrent creates of the same name cannot both succeed.
"""

import logging
from typing import List, Optional

from sqlalchemy import asc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.database import is_unique_violation, storage_error_message
from linkshelf.exceptions import ConflictError, DatabaseError, ValidationError
from linkshelf.models.folder import Folder
from linkshelf.schemas.folder import FolderCreate, FolderResponse

logger = logging.getLogger(__name__)


class FolderService:
    """Stateless service for the /api/folders resource."""

    async def list_folders(self, db: AsyncSession) -> List[str]:
        """Return all folder names in ascending order."""
        try:
            result = await db.execute(select(Folder.name).order_by(asc(Folder.name)))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error listing folders: %s", e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"error_type": type(e).__name__},
            )

    async def create_folder(
        self, db: AsyncSession, payload: Optional[FolderCreate]
    ) -> FolderResponse:
        """
        Insert a folder name.

        Raises:
            ValidationError: name missing or empty
            ConflictError: a folder with this name exists
            DatabaseError: any other storage failure
        """
        name = payload.name if payload else None
        if not name:
            raise ValidationError(message="Folder name is required", fields=["name"])

        try:
            db.add(Folder(name=name))
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.info("Folder %r already exists", name)
                raise ConflictError(message="Folder already exists", context={"name": name})
            logger.error("Error creating folder %r: %s", name, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"name": name, "error_type": type(e).__name__},
            )
        except SQLAlchemyError as e:
            logger.error("Error creating folder %r: %s", name, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"name": name, "error_type": type(e).__name__},
            )

        logger.info("Folder %r created", name)
        return FolderResponse(name=name)


# ── Singleton Instance ────────────────────────────────────────────────────
folder_service = FolderService()
