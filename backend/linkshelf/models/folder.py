"""
LinkShelf Backend — Folder SQLAlchemy Model
=============================================

What:  ORM model representing the `folders` table.
Why:   Gives the front-end a shared list of folder names to offer.

The UNIQUE constraint on `name` is the only guard against duplicates;
FolderService turns its violation into a 409 response.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkshelf.database import Base


class Folder(Base):
    """A named folder. Created once, never renamed or deleted through the API."""

    __tablename__ = "folders"

    # SERIAL on PostgreSQL, INTEGER PRIMARY KEY (rowid alias) on SQLite
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
