"""Link extraction and page fetching."""

from .fetcher import ContentFetcher, ReadabilityFetcher
from .links import MARKDOWN_LINK_RE, iter_links
from .models import FetchResult

__all__ = [
    "ContentFetcher",
    "ReadabilityFetcher",
    "FetchResult",
    "MARKDOWN_LINK_RE",
    "iter_links",
]
