"""Web page fetcher and readability extractor."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import trafilatura
import trafilatura.metadata

from ..errors import FetchError
from .models import FetchResult


class ContentFetcher(ABC):
    """Turns a URL into a title and readable body."""

    @abstractmethod
    async def fetch(self, url: str, timeout: float) -> FetchResult:
        """
        Fetch a page and extract its readable content.

        Args:
            url: Absolute http(s) URL
            timeout: Seconds allowed for the request

        Returns:
            Extracted title and body

        Raises:
            FetchError: The page is unreachable or has no extractable content
        """


class ReadabilityFetcher(ContentFetcher):
    """Fetch HTML with httpx and extract the main content with trafilatura."""

    def __init__(
        self,
        user_agent: str = "mdarchive/0.1 (Markdown link archiver)",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize readability fetcher.

        Args:
            user_agent: User-Agent header for every request
            transport: Optional httpx transport, used by tests to stub the network
        """
        self.user_agent = user_agent
        self.transport = transport

    def _extract(self, html: str, url: str) -> FetchResult:
        content = trafilatura.extract(
            html,
            output_format="html",
            include_comments=False,
            include_links=True,
            include_images=True,
            url=url,
        )
        if not content:
            raise FetchError("failed to extract article content")

        metadata = trafilatura.metadata.extract_metadata(html, default_url=url)
        title = metadata.title if metadata and metadata.title else ""
        return FetchResult(url=url, final_url=url, title=title, content=content)

    async def fetch(self, url: str, timeout: float) -> FetchResult:
        """Fetch and extract a single page."""
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        }
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                headers=headers,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()

                final_url = str(response.url)
                result = self._extract(response.text, final_url)
                return result.model_copy(update={"url": url})

        except FetchError:
            raise
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise FetchError("page not found (404)") from e
            if status == 403:
                raise FetchError("access forbidden (403)") from e
            if status >= 500:
                raise FetchError(f"server error ({status})") from e
            raise FetchError(f"HTTP {status}") from e
        except httpx.TimeoutException as e:
            raise FetchError("request timed out") from e
        except httpx.HTTPError as e:
            raise FetchError(f"HTTP error: {e}") from e
        except Exception as e:
            raise FetchError(f"unexpected error: {e}") from e
