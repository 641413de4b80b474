"""Tests for the readability fetcher, with the network stubbed by httpx.MockTransport."""

import asyncio
from types import SimpleNamespace

import httpx
import pytest
import trafilatura
import trafilatura.metadata

from mdarchive.errors import FetchError
from mdarchive.extraction import ReadabilityFetcher

PAGE = "<html><head><title>Hello</title></head><body><article><p>Hi</p></article></body></html>"


def _fetch(handler, url="https://example.com/post"):
    fetcher = ReadabilityFetcher(user_agent="test-agent", transport=httpx.MockTransport(handler))
    return asyncio.run(fetcher.fetch(url, timeout=5.0))


@pytest.fixture
def stub_extraction(monkeypatch):
    calls = {}

    def fake_extract(html, **kwargs):
        calls["extract"] = kwargs
        return "<div><p>Hi</p></div>" if "<article>" in html else None

    def fake_metadata(html, default_url=None):
        return SimpleNamespace(title="Hello")

    monkeypatch.setattr(trafilatura, "extract", fake_extract)
    monkeypatch.setattr(trafilatura.metadata, "extract_metadata", fake_metadata)
    return calls


def test_success_follows_redirects(stub_extraction):
    seen = []

    def handler(request):
        seen.append(request)
        if request.url.path == "/post":
            return httpx.Response(301, headers={"Location": "https://example.com/final"})
        return httpx.Response(200, text=PAGE)

    result = _fetch(handler)

    assert result.url == "https://example.com/post"
    assert result.final_url == "https://example.com/final"
    assert result.title == "Hello"
    assert result.content == "<div><p>Hi</p></div>"
    assert seen[0].headers["User-Agent"] == "test-agent"
    assert stub_extraction["extract"]["output_format"] == "html"


def test_empty_extraction_is_a_fetch_error(stub_extraction):
    with pytest.raises(FetchError, match="failed to extract"):
        _fetch(lambda request: httpx.Response(200, text="<html></html>"))


@pytest.mark.parametrize(
    "status, message",
    [(404, "not found"), (403, "forbidden"), (503, "server error"), (410, "HTTP 410")],
)
def test_http_errors(status, message):
    with pytest.raises(FetchError, match=message):
        _fetch(lambda request: httpx.Response(status))


def test_timeout_is_a_fetch_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(FetchError, match="timed out"):
        _fetch(handler)


def test_connection_error_is_a_fetch_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(FetchError, match="HTTP error"):
        _fetch(handler)
