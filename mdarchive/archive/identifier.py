"""Stable, filesystem-safe identifiers for links."""

import hashlib
import re
from typing import Tuple
from urllib.parse import quote, urlsplit

from ..errors import MalformedURLError

MAX_PREFIX_LENGTH = 100
HASH_LENGTH = 8

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9_?=.-]+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
# ASCII characters outside the unreserved, sub-delims, port and IPv6 sets
_INVALID_HOST_RE = re.compile(r"[^a-zA-Z0-9._~!$&'()*+,;=:\[\]%\-\x80-\U0010ffff]")


def _host_and_request_uri(url: str) -> Tuple[str, str]:
    # urlsplit silently drops tabs and newlines, so check the raw URL first
    if _CONTROL_RE.search(url):
        raise MalformedURLError(f"invalid control character in {url!r}")

    try:
        parts = urlsplit(url)
        # Raises ValueError on a non-numeric or out of range port
        parts.port
    except ValueError as e:
        raise MalformedURLError(f"cannot parse {url!r}: {e}") from e

    host = parts.netloc.rpartition("@")[2]
    if not host:
        raise MalformedURLError(f"no host in {url!r}")
    invalid = _INVALID_HOST_RE.search(host)
    if invalid:
        raise MalformedURLError(f"invalid character {invalid.group()!r} in host of {url!r}")

    request_uri = quote(parts.path, safe="/:@!$&'()*+,;=-._~%") or "/"
    # A trailing `?` with an empty query is kept
    if parts.query or "?" in url.partition("#")[0]:
        request_uri += "?" + parts.query
    return host, request_uri


def normalize(url: str) -> str:
    """Return the full, untruncated normalized form of a URL."""
    host, request_uri = _host_and_request_uri(url)

    normalized = f"{host}_{request_uri}"
    normalized = normalized.replace("/", "_")
    normalized = normalized.replace("?", "-").replace("=", "-")
    normalized = _DISALLOWED_RE.sub("", normalized)
    return normalized.rstrip("_")


def link_id(url: str) -> str:
    """
    Derive the archive key for a URL.

    The key is the normalized host and request path, cut to 100 characters,
    followed by `_` and the first 8 hex digits of the SHA-256 of the
    uncut normalized string.

    Raises:
        MalformedURLError: The URL has no parsable host and path
    """
    normalized = normalize(url)
    digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:HASH_LENGTH]
    return f"{normalized[:MAX_PREFIX_LENGTH]}_{digest}"
