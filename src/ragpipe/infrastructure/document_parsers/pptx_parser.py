"""Parser for .pptx (PowerPoint)."""

import io

from pptx import Presentation

from ragpipe.domain.exceptions import DocumentParseError
from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import file_metadata, normalize_value


def parse_pptx(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text from slides and core properties from .pptx."""
    try:
        prs = Presentation(io.BytesIO(data))
    except Exception as e:
        # zip, package and lxml XML errors all mean an unreadable file.
        raise DocumentParseError(f"Invalid or corrupted pptx file: {e}", filename) from e
    parts: list[str] = []
    for slide in prs.slides:
        for shape in slide.shapes:
            if getattr(shape, "has_text_frame", False) and shape.text_frame.text:
                parts.append(shape.text_frame.text)
    metadata: dict[str, str] = {}
    cp = prs.core_properties
    if cp.title:
        metadata["title"] = normalize_value(cp.title)
    if cp.author:
        metadata["author"] = normalize_value(cp.author)
    if cp.created:
        metadata["created_date"] = normalize_value(cp.created)
    if cp.modified:
        metadata["modified_date"] = normalize_value(cp.modified)
    metadata["page_count"] = str(len(prs.slides))
    metadata.update(file_metadata(filename, "pptx"))
    return ParseResult(text="\n\n".join(parts), metadata=metadata)
