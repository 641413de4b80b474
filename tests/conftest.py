"""Shared fixtures: a fake fetcher and throwaway input/output trees."""

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Set

import pytest

from mdarchive.config import ArchiverConfig, FetchConfig
from mdarchive.errors import FetchError
from mdarchive.extraction import ContentFetcher, FetchResult


class FakeFetcher(ContentFetcher):
    """Deterministic fetcher that serves canned pages and records every call."""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        failures: Optional[Set[str]] = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = pages or {}
        self.failures = failures or set()
        self.delay = delay
        self.calls: List[str] = []

    async def fetch(self, url: str, timeout: float) -> FetchResult:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url in self.failures:
            raise FetchError("connection refused")
        body = self.pages.get(url, f"<p>content of {url}</p>")
        return FetchResult(url=url, final_url=url, title=f"Title of {url}", content=body)


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "notes"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "archive"
    path.mkdir()
    return path


@pytest.fixture
def make_config(input_dir: Path, output_dir: Path):
    def _make(**fetch) -> ArchiverConfig:
        return ArchiverConfig(input_dir=input_dir, output_dir=output_dir, fetch=FetchConfig(**fetch))

    return _make


@pytest.fixture
def write_doc(input_dir: Path):
    def _write(relative: str, text: str, root: Optional[Path] = None) -> Path:
        path = (root or input_dir) / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
