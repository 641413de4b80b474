"""Archival orchestrator: walks the document tree and archives every new link."""

import asyncio
import os
import time
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Set

import pendulum
from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..archive import ArchiveStorage, CheckedLinkCache, Metadata, link_id
from ..config import ArchiverConfig
from ..errors import FetchError, MalformedURLError, TraversalError
from ..extraction import ContentFetcher, FetchResult, ReadabilityFetcher, iter_links

console = Console()
err_console = Console(stderr=True)

DOCUMENT_SUFFIXES = (".md", ".markdown")


class LinkOutcome(str, Enum):
    """Terminal state of one discovered link."""

    MALFORMED = "malformed"
    CACHED = "cached"
    ON_DISK = "on_disk"
    ARCHIVED = "archived"
    FETCH_FAILED = "fetch_failed"


class RunStats(BaseModel):
    """Counters for one archival run."""

    documents: int = Field(0, description="Documents scanned")
    links: int = Field(0, description="Links discovered, duplicates included")
    archived: int = Field(0, description="New archive entries written")
    cached: int = Field(0, description="Links skipped because the cache had them")
    on_disk: int = Field(0, description="Links skipped because an entry already existed")
    failed: int = Field(0, description="Links whose fetch failed")
    malformed: int = Field(0, description="Links with no parsable host and path")
    duration: float = Field(0.0, description="Run time in seconds")

    def record(self, outcome: LinkOutcome) -> None:
        """Count a link outcome."""
        if outcome is LinkOutcome.MALFORMED:
            self.malformed += 1
        elif outcome is LinkOutcome.CACHED:
            self.cached += 1
        elif outcome is LinkOutcome.ON_DISK:
            self.on_disk += 1
        elif outcome is LinkOutcome.ARCHIVED:
            self.archived += 1
        elif outcome is LinkOutcome.FETCH_FAILED:
            self.failed += 1


def iter_documents(root: Path) -> Iterator[Path]:
    """
    Yield Markdown documents under root, depth first in name order.

    Symlinked directories are not followed.

    Raises:
        TraversalError: A directory cannot be listed
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise TraversalError(f"cannot list {root}: {e}") from e

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from iter_documents(path)
        elif entry.name.endswith(DOCUMENT_SUFFIXES):
            yield path


def read_document(path: Path) -> str:
    """Read a document, raising TraversalError on I/O failure."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise TraversalError(f"cannot read {path}: {e}") from e


class ArchivalOrchestrator:
    """
    Archive every link found in a Markdown tree exactly once.

    For each link: compute its ID, skip it if the cache has it, skip it and
    repair the cache if an entry is already on disk, otherwise fetch it, write
    the entry on success, and record the attempt in the cache either way.
    Fetch failures are reported and never abort the run. Traversal, write and
    cache I/O failures do, in which case the cache is not flushed.
    """

    def __init__(self, config: ArchiverConfig, fetcher: Optional[ContentFetcher] = None):
        """
        Initialize archival orchestrator.

        Args:
            config: Input/output directories and fetch settings
            fetcher: Content fetcher; defaults to the readability fetcher
        """
        self.config = config
        self.fetcher = fetcher or ReadabilityFetcher(user_agent=config.fetch.user_agent)
        self.cache = CheckedLinkCache(config.cache_path)
        self.storage = ArchiveStorage(config.output_dir)
        self.stats = RunStats()
        self._in_flight: Set[str] = set()

    def run(self) -> RunStats:
        """Run one archival pass over the input tree."""
        return asyncio.run(self.archive())

    async def archive(self) -> RunStats:
        """Run one archival pass inside an event loop."""
        start_time = time.time()
        self.stats = RunStats()

        self.cache.load()
        self.storage.purge_partials()

        semaphore = asyncio.Semaphore(self.config.fetch.max_concurrent)
        for path in iter_documents(self.config.input_dir):
            await self.process_document(path, semaphore)

        self.cache.flush()
        self.stats.duration = time.time() - start_time
        return self.stats

    async def process_document(self, path: Path, semaphore: asyncio.Semaphore) -> None:
        """Process every link of one document, fetching under the semaphore."""
        links = list(iter_links(read_document(path)))
        self.stats.documents += 1
        self.stats.links += len(links)

        outcomes = await asyncio.gather(
            *(self.process_link(link, semaphore) for link in links)
        )
        for outcome in outcomes:
            self.stats.record(outcome)

    async def process_link(self, url: str, semaphore: asyncio.Semaphore) -> LinkOutcome:
        """
        Drive one link to a terminal state.

        Everything up to the fetch runs without yielding to the event loop,
        so the cache and in-flight checks for a link ID happen atomically.
        """
        try:
            lid = link_id(url)
        except MalformedURLError as e:
            err_console.print(f"cannot get link ID: {escape(str(e))}")
            return LinkOutcome.MALFORMED

        if self.cache.contains(lid) or lid in self._in_flight:
            return LinkOutcome.CACHED

        if self.storage.exists(lid):
            # Entry survived a run whose cache was never flushed
            self.cache.mark_checked(lid)
            return LinkOutcome.ON_DISK

        self._in_flight.add(lid)
        try:
            async with semaphore:
                try:
                    result = await self._fetch(url)
                except FetchError as e:
                    err_console.print(f"cannot fetch {escape(url)}: {escape(str(e))}")
                    self.cache.mark_checked(lid)
                    return LinkOutcome.FETCH_FAILED

            metadata = Metadata(
                url=url,
                title=result.title,
                archived_at=pendulum.now("UTC"),
            )
            self.storage.write(lid, metadata, result.content)
            console.print(f"Archived {escape(url)}")
            self.cache.mark_checked(lid)
            return LinkOutcome.ARCHIVED
        finally:
            self._in_flight.discard(lid)

    async def _fetch(self, url: str) -> FetchResult:
        timeout = self.config.fetch.timeout
        try:
            return await asyncio.wait_for(self.fetcher.fetch(url, timeout), timeout)
        except asyncio.TimeoutError as e:
            raise FetchError("request timed out") from e
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"unexpected error: {e}") from e


def print_run_summary(stats: RunStats) -> None:
    """Print summary of an archival run."""
    table = Table(title="Archive Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="bold", justify="right")

    table.add_row("Documents scanned", str(stats.documents))
    table.add_row("Links found", str(stats.links))
    table.add_row("Archived", f"[green]{stats.archived}[/green]")
    table.add_row("Skipped (cached)", str(stats.cached))
    table.add_row("Skipped (already on disk)", str(stats.on_disk))
    table.add_row("Fetch failures", f"[red]{stats.failed}[/red]" if stats.failed else "0")
    table.add_row("Malformed links", str(stats.malformed))

    console.print(table)
    console.print(f"[dim]Completed in {stats.duration:.1f}s[/dim]")
