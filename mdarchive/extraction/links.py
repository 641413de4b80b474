"""Markdown link extraction."""

import re
from typing import Iterator

# A link needs one character before its opening bracket: a link at the very
# start of a line (or of the document) is not matched. The preceding character
# must not be `!`, which excludes images.
#
#   [^!]              any character except `!`
#   \[[^\]\[]+\]      label of one or more non-bracket characters
#   \((https?://      opening parenthesis, captured URL starts with the scheme
#   [^()]+)\)         at least one non-parenthesis character, then `)`
MARKDOWN_LINK_RE = re.compile(r"[^!]\[[^\]\[]+\]\((https?://[^()]+)\)")


def iter_links(markdown: str) -> Iterator[str]:
    """Yield every http(s) link URL in document order, duplicates included."""
    for match in MARKDOWN_LINK_RE.finditer(markdown):
        yield match.group(1)
