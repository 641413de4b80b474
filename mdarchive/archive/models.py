"""Data models for archive entries."""

from datetime import datetime

from pydantic import BaseModel, Field


class Metadata(BaseModel):
    """Metadata stored at the top of an archived page."""

    url: str = Field(..., description="Original source URL")
    title: str = Field("", description="Extracted title, may be empty")
    archived_at: datetime = Field(..., description="When the page was archived")


class ArchiveEntry(BaseModel):
    """An archived page read back from disk."""

    link_id: str = Field(..., description="Directory name of the entry")
    metadata: Metadata
    content: str = Field(..., description="Extracted body HTML")
