"""
LinkShelf Backend — Link Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract for /api/links.
Why:   Request bodies are parsed into typed objects; responses are
       serialized with the tags list already decoded.

Request fields are all optional at the schema level. Presence of the
required fields (id, url, created) is checked by LinkService so that a
missing field yields 400 "Missing required fields" instead of a schema
error. Unknown fields (e.g. `id` or `created` in a PUT body) are ignored.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class LinkCreate(BaseModel):
    """Body of POST /api/links."""
    id: Optional[str] = Field(default=None, description="Client-generated unique identifier")
    url: Optional[str] = Field(default=None, description="The bookmarked URL")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    folder: Optional[str] = Field(default=None, description="Folder label")
    tags: Optional[List[str]] = Field(default=None, description="Ordered list of tags")
    created: Optional[str] = Field(
        default=None,
        description="Creation timestamp chosen by the client; sorted as a string",
    )


class LinkUpdate(BaseModel):
    """
    Body of PUT /api/links/{id}.

    All four fields are written on every update. A field left out of the
    body is stored as "" (notes, folder), [] (tags) or NULL (url).
    """
    url: Optional[str] = Field(default=None, description="The bookmarked URL")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    folder: Optional[str] = Field(default=None, description="Folder label")
    tags: Optional[List[str]] = Field(default=None, description="Ordered list of tags")


class LinkResponse(BaseModel):
    """
    What:  Full representation of a stored link.
    Who:   Returned by GET /api/links (as array items), GET /api/links/{id}
           and POST /api/links.

    `notes` and `folder` are nullable only for rows written by other
    clients of the same table; this service always stores strings.
    """
    id: str = Field(description="Unique link identifier")
    url: str = Field(description="The bookmarked URL")
    notes: Optional[str] = Field(default="", description="Free-text notes")
    folder: Optional[str] = Field(default="", description="Folder label")
    tags: List[str] = Field(default_factory=list, description="Ordered list of tags")
    created: str = Field(description="Creation timestamp as supplied by the client")

    model_config = {"from_attributes": True}
