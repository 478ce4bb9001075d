"""
LinkShelf Backend — Link Service
==================================

What:  Business rules for the /api/links resource.
How:   Each public method issues exactly one SQL statement through the
       request's AsyncSession and converts the outcome into a response
       model or an application exception.
Who:   Called by routes/links.py; mocked in tests/test_link_service.py.

Tags storage:
    The `tags` column holds a compact JSON array (`["a","b"]`). It is
    encoded on every write and decoded on every read, so callers only
    ever see a list. NULL, "" and JSON null all read back as [].

Error mapping:
    missing id/url/created  → ValidationError (400)
    no row for id           → NotFoundError (404)
    any SQLAlchemy failure  → DatabaseError (500), including a duplicate
                              primary key on create
"""

import json
import logging
from typing import Any, List, Optional, Sequence

from sqlalchemy import delete, desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.database import storage_error_message
from linkshelf.exceptions import DatabaseError, NotFoundError, ValidationError
from linkshelf.models.link import Link
from linkshelf.schemas.link import LinkCreate, LinkResponse, LinkUpdate

logger = logging.getLogger(__name__)

REQUIRED_CREATE_FIELDS = ("id", "url", "created")


def encode_tags(tags: Optional[Sequence[str]]) -> str:
    """Serialize a tags list for the TEXT column; None and [] both give '[]'."""
    return json.dumps(list(tags or []), separators=(",", ":"))


def decode_tags(raw: Optional[str]) -> List[str]:
    """
    Materialize the stored tags column as a list.

    Raises ValueError for a stored value that is not a JSON array; callers
    report it as a storage error.
    """
    if not raw:
        return []
    value: Any = json.loads(raw)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Stored tags are not a JSON array: {raw}")
    return value


def to_response(link: Link) -> LinkResponse:
    """Build the API representation of a row, decoding its tags."""
    return LinkResponse(
        id=link.id,
        url=link.url,
        notes=link.notes,
        folder=link.folder,
        tags=decode_tags(link.tags),
        created=link.created,
    )


class LinkService:
    """
    Stateless service for link CRUD.

    Every method receives the session for the current request. Writes
    commit before returning; rollback on failure is left to get_db_session().
    """

    async def list_links(self, db: AsyncSession) -> List[LinkResponse]:
        """
        Return every link, newest first.

        "Newest" is a plain descending string sort on `created`, so it is
        chronological only when clients use a sortable format such as ISO 8601.
        """
        try:
            result = await db.execute(select(Link).order_by(desc(Link.created)))
            return [to_response(link) for link in result.scalars().all()]
        except (SQLAlchemyError, ValueError) as e:
            logger.error("Error listing links: %s", e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"error_type": type(e).__name__},
            )

    async def get_link(self, db: AsyncSession, link_id: str) -> LinkResponse:
        try:
            result = await db.execute(select(Link).where(Link.id == link_id))
            link = result.scalar_one_or_none()
            if link is None:
                raise NotFoundError(resource="Link", resource_id=link_id)
            return to_response(link)
        except NotFoundError:
            raise
        except (SQLAlchemyError, ValueError) as e:
            logger.error("Error fetching link %s: %s", link_id, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"link_id": link_id, "error_type": type(e).__name__},
            )

    async def create_link(self, db: AsyncSession, payload: Optional[LinkCreate]) -> LinkResponse:
        """
        Insert a new link with the client's id.

        Raises:
            ValidationError: id, url or created is missing or empty
            DatabaseError: the insert failed, e.g. the id is already taken
        """
        payload = payload or LinkCreate()
        missing = [name for name in REQUIRED_CREATE_FIELDS if not getattr(payload, name)]
        if missing:
            raise ValidationError(message="Missing required fields", fields=missing)

        notes = payload.notes or ""
        folder = payload.folder or ""
        tags = list(payload.tags or [])

        link = Link(
            id=payload.id,
            url=payload.url,
            notes=notes,
            folder=folder,
            tags=encode_tags(tags),
            created=payload.created,
        )
        try:
            db.add(link)
            await db.flush()
            # Durable before the 201 goes out; the dependency closes after the response
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error creating link %s: %s", payload.id, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"link_id": payload.id, "error_type": type(e).__name__},
            )

        logger.info("Link %s created", payload.id)
        return LinkResponse(
            id=payload.id,
            url=payload.url,
            notes=notes,
            folder=folder,
            tags=tags,
            created=payload.created,
        )

    async def update_link(
        self, db: AsyncSession, link_id: str, payload: Optional[LinkUpdate]
    ) -> None:
        """
        Overwrite url, notes, folder and tags of an existing link.

        There is no partial update: omitted fields are written as empty
        values. `id` and `created` are never touched.

        Raises:
            NotFoundError: no row has this id
            DatabaseError: the update failed (e.g. url omitted → NOT NULL)
        """
        payload = payload or LinkUpdate()
        stmt = (
            update(Link)
            .where(Link.id == link_id)
            .values(
                url=payload.url,
                notes=payload.notes or "",
                folder=payload.folder or "",
                tags=encode_tags(payload.tags),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error updating link %s: %s", link_id, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"link_id": link_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="Link", resource_id=link_id)
        logger.info("Link %s updated", link_id)

    async def delete_link(self, db: AsyncSession, link_id: str) -> None:
        stmt = (
            delete(Link)
            .where(Link.id == link_id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error deleting link %s: %s", link_id, e)
            raise DatabaseError(
                message=storage_error_message(e),
                context={"link_id": link_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="Link", resource_id=link_id)
        logger.info("Link %s deleted", link_id)


# ── Singleton Instance ────────────────────────────────────────────────────
link_service = LinkService()
