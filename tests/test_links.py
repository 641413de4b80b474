"""Tests for Markdown link extraction."""

import pytest

from mdarchive.extraction import iter_links


@pytest.mark.parametrize(
    "given, expected",
    [
        (" [abc](https://example.com)", ["https://example.com"]),
        (
            " [abc](https://example.com) [bcd](https://example.org)",
            ["https://example.com", "https://example.org"],
        ),
        (" [abc](http://example.com)", ["http://example.com"]),
        (" [abc](http://)", []),
        (" ![logo](https://example.com/logo.png)", []),
        (" [abc](ftp://example.com/file)", []),
        (" [abc](/relative/path)", []),
    ],
    ids=["single", "multiple", "http", "scheme-only", "image", "ftp", "relative"],
)
def test_iter_links(given, expected):
    assert list(iter_links(given)) == expected


def test_link_at_start_of_document_is_not_matched():
    assert list(iter_links("[abc](https://example.com)")) == []


def test_link_at_start_of_line_is_matched_through_newline():
    text = "intro\n[abc](https://example.com)"
    assert list(iter_links(text)) == ["https://example.com"]


def test_duplicates_are_kept_in_document_order():
    text = "See [a](https://b.example) and [c](https://a.example), again [a](https://b.example)."
    assert list(iter_links(text)) == [
        "https://b.example",
        "https://a.example",
        "https://b.example",
    ]


def test_image_and_link_mixed():
    text = "x ![img](https://example.com/i.png) then [page](https://example.com/page)"
    assert list(iter_links(text)) == ["https://example.com/page"]


def test_iter_links_is_single_pass():
    links = iter_links(" [a](https://example.com)")
    assert list(links) == ["https://example.com"]
    assert list(links) == []
