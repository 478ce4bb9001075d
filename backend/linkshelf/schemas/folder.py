"""
LinkShelf Backend — Folder Request/Response Schemas
=====================================================

GET /api/folders returns a bare JSON array of names, so only the create
contract needs models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class FolderCreate(BaseModel):
    """Body of POST /api/folders. `name` is checked for presence by FolderService."""
    name: Optional[str] = Field(default=None, description="Unique folder name")


class FolderResponse(BaseModel):
    """Returned by POST /api/folders with HTTP 201."""
    name: str = Field(description="Name of the created folder")
