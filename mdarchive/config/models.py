"""Configuration models."""

from pathlib import Path

from pydantic import BaseModel, Field


class FetchConfig(BaseModel):
    """Content fetching configuration."""

    timeout: float = Field(5.0, description="Per-link fetch timeout in seconds", gt=0.0, le=300.0)
    max_concurrent: int = Field(1, description="Max links fetched at once", ge=1, le=32)
    user_agent: str = Field(
        "mdarchive/0.1 (Markdown link archiver)",
        description="User-Agent header sent with every request",
    )


class ConfigModel(BaseModel):
    """Settings file model."""

    fetch: FetchConfig = Field(default_factory=FetchConfig)


class ArchiverConfig(BaseModel):
    """Everything one archival run needs."""

    input_dir: Path = Field(..., description="Root of the Markdown document tree")
    output_dir: Path = Field(..., description="Root of the archive")
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    @property
    def cache_path(self) -> Path:
        """Path of the checked-links cache file."""
        return self.output_dir / ".checked_links.txt"
