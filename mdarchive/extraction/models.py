"""Data models for content extraction."""

from pydantic import BaseModel, Field


class FetchResult(BaseModel):
    """Readable content extracted from a web page."""

    url: str = Field(..., description="Requested URL")
    final_url: str = Field(..., description="URL after redirects")
    title: str = Field("", description="Page title, may be empty")
    content: str = Field(..., description="Extracted body HTML")
