"""Parser for .epub (e-book)."""

import io
import re
from html import unescape

import ebooklib
from ebooklib import epub
from ebooklib.epub import EpubBook

from ragpipe.domain.exceptions import DocumentParseError
from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import (
    PARSER_KEY_TO_CANONICAL,
    file_metadata,
)

_TAG_RE = re.compile(r"<[^>]+>")


def _get_dc(book: EpubBook, key: str) -> str | None:
    """Get first Dublin Core metadata value."""
    values = book.get_metadata("DC", key)
    if not values or not values[0]:
        return None
    v = values[0][0] if isinstance(values[0], (list, tuple)) else values[0]
    return str(v) if v else None


def _html_to_text(html: str) -> str:
    return " ".join(unescape(_TAG_RE.sub(" ", html)).split())


def parse_epub(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text from chapters and Dublin Core metadata from .epub."""
    try:
        book = epub.read_epub(io.BytesIO(data))
    except Exception as e:
        # ebooklib raises bare Exception subclasses and zip/XML errors alike.
        raise DocumentParseError(f"Invalid or corrupted epub file: {e}", filename) from e
    parts: list[str] = []
    for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT):
        text = _html_to_text(item.get_content().decode("utf-8", errors="replace"))
        if text:
            parts.append(text)
    metadata: dict[str, str] = {}
    for dc_key in ("title", "creator", "language", "date"):
        val = _get_dc(book, dc_key)
        if val:
            metadata[PARSER_KEY_TO_CANONICAL[f"dc:{dc_key}"]] = val
    metadata.update(file_metadata(filename, "epub"))
    return ParseResult(text="\n\n".join(parts), metadata=metadata)
