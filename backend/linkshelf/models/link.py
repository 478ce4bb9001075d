"""
LinkShelf Backend — Link SQLAlchemy Model
===========================================

What:  ORM model representing the `links` table.
Who:   Used by LinkService for CRUD statements and by init_models() for
       table creation.

Table Design:
    - id: TEXT primary key chosen by the client (the front-end generates it)
    - url: required
    - notes / folder: free text, written as "" when the client omits them
    - tags: JSON-encoded list of strings, e.g. '["python","reading"]'
    - created: client-supplied timestamp string; sorted as text, never parsed

    `folder` is a plain label. There is no foreign key to `folders`, so a
    link may name a folder that was never created.
"""

from typing import Optional

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkshelf.database import Base


class Link(Base):
    """
    A stored bookmark.

    Lifecycle:
        1. Inserted with its client id and created timestamp
        2. url/notes/folder/tags overwritten as a block by PUT
        3. Deleted by id (hard delete)

    Query Patterns:
        - List: SELECT ... ORDER BY created DESC → idx_links_created
        - Get/update/delete: WHERE id = :id → primary key
    """

    __tablename__ = "links"

    id: Mapped[str] = mapped_column(Text, primary_key=True)

    url: Mapped[str] = mapped_column(Text, nullable=False)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Label only, see module docstring
    folder: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # JSON text; decoded by LinkService, never queried by content
    tags: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_links_created", created.desc()),
    )

    def __repr__(self) -> str:
        return f"<Link(id='{self.id}', url='{self.url}', created='{self.created}')>"
