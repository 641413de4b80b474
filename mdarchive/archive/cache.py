"""Persistent set of link IDs that have already been attempted."""

import os
import uuid
from pathlib import Path
from typing import Iterator, Set

from ..errors import CacheIOError


class CheckedLinkCache:
    """
    Dedup cache backed by a newline-delimited file of link IDs.

    An ID in the cache means the link was attempted, not that it was
    archived: fetch failures are recorded too and are not retried until the
    file is cleared. The cache is loaded once, mutated in memory by its single
    owner, and flushed once.
    """

    def __init__(self, path: Path) -> None:
        """
        Initialize the cache.

        Args:
            path: Location of the cache file
        """
        self.path = path
        self._ids: Set[str] = set()
        self._loaded = False

    def load(self) -> Set[str]:
        """Read the cache file into memory. A missing file is an empty cache."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            text = ""
        except (OSError, UnicodeDecodeError) as e:
            raise CacheIOError(f"cannot read cache {self.path}: {e}") from e

        self._ids = {line.strip() for line in text.splitlines() if line.strip()}
        self._loaded = True
        return set(self._ids)

    def contains(self, link_id: str) -> bool:
        """Return True if the link ID was attempted before."""
        return link_id in self._ids

    def mark_checked(self, link_id: str) -> None:
        """Record an attempt on a link ID."""
        self._ids.add(link_id)

    def flush(self) -> None:
        """Overwrite the cache file with every ID, sorted, one per line."""
        if not self._loaded:
            raise CacheIOError("cache flushed before it was loaded")

        payload = "".join(f"{link_id}\n" for link_id in sorted(self._ids))
        tmp = self.path.with_name(f"{self.path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp.open("w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise CacheIOError(f"cannot write cache {self.path}: {e}") from e

    def __contains__(self, link_id: str) -> bool:
        return self.contains(link_id)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)
