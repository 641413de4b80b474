"""Archive entry storage."""

import shutil
import uuid
from pathlib import Path
from typing import Iterator, List, Tuple

import yaml
from pydantic import ValidationError

from ..errors import ArchiveExistsError, WriteError
from .models import ArchiveEntry, Metadata

ENTRY_FILENAME = "index.html"
FRONTMATTER_DELIMITER = "---"
PARTIAL_MARKER = ".partial-"


def render_document(metadata: Metadata, content: str) -> str:
    """Render metadata as a YAML preamble followed by the raw body."""
    frontmatter = yaml.safe_dump(
        metadata.model_dump(mode="json"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return f"{FRONTMATTER_DELIMITER}\n{frontmatter.strip()}\n{FRONTMATTER_DELIMITER}\n{content}"


def parse_document(text: str) -> Tuple[Metadata, str]:
    """
    Split an archived document into metadata and body.

    Returns:
        Tuple of (metadata, content)

    Raises:
        ValueError: The document has no valid preamble
    """
    opening = f"{FRONTMATTER_DELIMITER}\n"
    closing = f"\n{FRONTMATTER_DELIMITER}\n"
    if not text.startswith(opening):
        raise ValueError("missing metadata preamble")

    frontmatter, found, content = text[len(opening):].partition(closing)
    if not found:
        raise ValueError("unterminated metadata preamble")

    try:
        data = yaml.safe_load(frontmatter) or {}
        return Metadata(**data), content
    except (yaml.YAMLError, TypeError, ValidationError) as e:
        raise ValueError(f"invalid metadata preamble: {e}") from e


class ArchiveStorage:
    """Read and write archive entries under an output directory."""

    def __init__(self, output_dir: Path) -> None:
        """Initialize archive storage."""
        self.output_dir = output_dir

    def entry_dir(self, link_id: str) -> Path:
        """Get the directory of an entry."""
        return self.output_dir / link_id

    def exists(self, link_id: str) -> bool:
        """Return True if a completed entry exists on disk."""
        return self.entry_dir(link_id).exists()

    def write(self, link_id: str, metadata: Metadata, content: str) -> Path:
        """
        Create the entry for a link ID.

        The document is written into a hidden staging directory and renamed
        into place, so an entry is either absent or complete.

        Returns:
            Path of the written document

        Raises:
            ArchiveExistsError: An entry already exists for the link ID
            WriteError: The entry could not be created
        """
        final_dir = self.entry_dir(link_id)
        if final_dir.exists():
            raise ArchiveExistsError(f"archive entry already exists: {final_dir}")

        document = render_document(metadata, content)
        staging_dir = self.output_dir / f".{link_id}{PARTIAL_MARKER}{uuid.uuid4().hex}"
        try:
            staging_dir.mkdir()
            (staging_dir / ENTRY_FILENAME).write_text(document, encoding="utf-8")
            if final_dir.exists():
                raise ArchiveExistsError(f"archive entry already exists: {final_dir}")
            staging_dir.rename(final_dir)
        except ArchiveExistsError:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise
        except OSError as e:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise WriteError(f"cannot write archive entry {final_dir}: {e}") from e

        return final_dir / ENTRY_FILENAME

    def purge_partials(self) -> List[Path]:
        """Remove staging directories left behind by interrupted runs."""
        removed = []
        try:
            for path in sorted(self.output_dir.glob(f".*{PARTIAL_MARKER}*")):
                if path.is_dir():
                    shutil.rmtree(path)
                    removed.append(path)
        except OSError as e:
            raise WriteError(f"cannot clean up {self.output_dir}: {e}") from e
        return removed

    def read_entry(self, link_id: str) -> ArchiveEntry:
        """
        Read an entry back from disk.

        Raises:
            FileNotFoundError: No entry exists for the link ID
            ValueError: The entry's document is malformed
        """
        text = (self.entry_dir(link_id) / ENTRY_FILENAME).read_text(encoding="utf-8")
        metadata, content = parse_document(text)
        return ArchiveEntry(link_id=link_id, metadata=metadata, content=content)

    def iter_entries(self) -> Iterator[ArchiveEntry]:
        """Yield every completed entry in name order, skipping unreadable ones."""
        for path in sorted(self.output_dir.iterdir()):
            if path.name.startswith(".") or not path.is_dir():
                continue
            try:
                yield self.read_entry(path.name)
            except (OSError, ValueError):
                continue
