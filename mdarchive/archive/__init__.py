"""Link identifiers, the dedup cache, and archive storage."""

from .cache import CheckedLinkCache
from .identifier import link_id, normalize
from .models import ArchiveEntry, Metadata
from .writer import ArchiveStorage, parse_document, render_document

__all__ = [
    "ArchiveEntry",
    "ArchiveStorage",
    "CheckedLinkCache",
    "Metadata",
    "link_id",
    "normalize",
    "parse_document",
    "render_document",
]
