"""Parser for .docx (Office Open XML Word)."""

import io

from docx import Document as DocxDocument

from ragpipe.domain.exceptions import DocumentParseError
from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import (
    PARSER_KEY_TO_CANONICAL,
    file_metadata,
    normalize_value,
)


def _map_metadata(core_props: object) -> dict[str, str]:
    """Map docx core properties to canonical keys; the first non-empty value wins."""
    result: dict[str, str] = {}
    for name in ("title", "subject", "author", "created", "modified", "language"):
        val = getattr(core_props, name, None)
        if val is None or val == "":
            continue
        canonical_key = PARSER_KEY_TO_CANONICAL[name]
        result.setdefault(canonical_key, normalize_value(val))
    return result


def parse_docx(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract paragraphs, table rows and core properties from .docx bytes."""
    try:
        doc = DocxDocument(io.BytesIO(data))
    except Exception as e:
        # zip, package and lxml XML errors all mean an unreadable file.
        raise DocumentParseError("Invalid or corrupted docx file", filename) from e
    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
    tables_text: list[str] = []
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                tables_text.append(" ".join(cells))
    text = "\n\n".join(paragraphs)
    if tables_text:
        text = "\n\n".join(filter(None, [text, "\n".join(tables_text)]))
    metadata = _map_metadata(doc.core_properties)
    metadata.update(file_metadata(filename, "docx"))
    return ParseResult(text=text, metadata=metadata)
