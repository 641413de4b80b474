"""Tests for link ID derivation."""

import hashlib

import pytest

from mdarchive.archive import link_id, normalize
from mdarchive.archive.identifier import MAX_PREFIX_LENGTH
from mdarchive.errors import MalformedURLError


def _split(lid: str):
    prefix, _, digest = lid.rpartition("_")
    return prefix, digest


def test_bare_host():
    expected_hash = hashlib.sha256(b"example.com").hexdigest()[:8]
    assert link_id("https://example.com") == f"example.com_{expected_hash}"
    assert link_id("https://example.com/") == link_id("https://example.com")


def test_path_and_query_are_normalized():
    assert normalize("https://example.com/a/b?x=1&y=2") == "example.com__a_b-x-1y-2"


def test_trailing_slash_is_trimmed():
    assert normalize("https://example.com/docs/") == "example.com__docs"


def test_port_kept_and_userinfo_dropped():
    assert normalize("http://user:pw@example.com:8080/x") == "example.com8080__x"


def test_non_ascii_path_is_escaped_then_stripped():
    assert normalize("https://example.com/café") == "example.com__cafC3A9"


def test_link_id_is_deterministic():
    url = "https://example.com/some/page?id=42"
    assert link_id(url) == link_id(url)


def test_prefix_is_bounded():
    url = "https://example.com/" + "a" * 300
    prefix, digest = _split(link_id(url))
    assert len(prefix) == MAX_PREFIX_LENGTH
    assert len(digest) == 8


def test_hash_covers_untruncated_string():
    base = "https://example.com/" + "a" * 200
    first, second = link_id(base + "/one"), link_id(base + "/two")
    assert _split(first)[0] == _split(second)[0]
    assert first != second


def test_only_safe_characters():
    lid = link_id("https://example.com/a b/<c>/\"d\"/é?q=ü#frag")
    assert all(ch.isalnum() and ch.isascii() or ch in "_-." for ch in lid)


@pytest.mark.parametrize(
    "url",
    [
        "http://",
        "https://",
        "http://host:abc/x",
        "http://[::1/x",
        "https://exa mple.com",
        "https://exa\nmple.com",
        "https://exa\tmple.com/page",
        "https://example.com/a\x7fb",
        "https://exa<mple>.com",
    ],
)
def test_malformed_urls(url):
    with pytest.raises(MalformedURLError):
        link_id(url)


def test_non_ascii_host_is_accepted():
    assert normalize("https://bücher.example/x") == "bcher.example__x"


def test_empty_query_keeps_question_mark():
    assert normalize("https://a.com/x?") == "a.com__x-"
    assert link_id("https://a.com/x?") != link_id("https://a.com/x")
    assert normalize("https://a.com/x#frag?") == "a.com__x"
