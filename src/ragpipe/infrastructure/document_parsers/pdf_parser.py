"""Parser for PDF."""

import io

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ragpipe.domain.exceptions import DocumentParseError
from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import (
    PARSER_KEY_TO_CANONICAL,
    file_metadata,
    normalize_value,
)


def _parse_pdf_date(value: str | None) -> str:
    """Convert PDF date string (D:YYYYMMDD...) to YYYY-MM-DD."""
    if not value or not value.startswith("D:"):
        return normalize_value(value)
    s = value[2:].strip()
    if len(s) >= 8:
        return f"{s[:4]}-{s[4:6]}-{s[6:8]}"
    return value


def _map_metadata(reader: PdfReader) -> dict[str, str]:
    """Map PDF document info to canonical keys."""
    result: dict[str, str] = {}
    meta = reader.metadata
    if not meta:
        return result
    for key in ("/Title", "/Author", "/CreationDate", "/ModDate", "/Lang"):
        raw = meta.get(key)
        if raw is None or str(raw) == "":
            continue
        val = str(raw)
        result[PARSER_KEY_TO_CANONICAL[key]] = _parse_pdf_date(val) if "Date" in key else val
    return result


def parse_pdf(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract page text and metadata from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(data))
        parts = [t for t in (page.extract_text() for page in reader.pages) if t]
    except (PdfReadError, ValueError, OSError) as e:
        raise DocumentParseError(f"Invalid or corrupted PDF: {e}", filename) from e
    metadata = _map_metadata(reader)
    metadata["page_count"] = str(len(reader.pages))
    metadata.update(file_metadata(filename, "pdf"))
    return ParseResult(text="\n\n".join(parts), metadata=metadata)
