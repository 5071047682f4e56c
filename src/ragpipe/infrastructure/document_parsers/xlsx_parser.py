"""Parser for .xlsx (Excel)."""

import io

from openpyxl import load_workbook

from ragpipe.domain.exceptions import DocumentParseError
from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import file_metadata, normalize_value


def parse_xlsx(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text from all cells, one line per row, and workbook properties."""
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        # zip, package and XML errors all mean an unreadable file.
        raise DocumentParseError(f"Invalid or corrupted xlsx file: {e}", filename) from e
    try:
        parts: list[str] = []
        for sheet in wb.worksheets:
            for row in sheet.iter_rows(values_only=True):
                cells = [str(c).strip() for c in row if c is not None and str(c).strip()]
                if cells:
                    parts.append(" ".join(cells))
        metadata: dict[str, str] = {}
        cp = wb.properties
        if cp.title:
            metadata["title"] = normalize_value(cp.title)
        if cp.creator:
            metadata["author"] = normalize_value(cp.creator)
        if cp.created:
            metadata["created_date"] = normalize_value(cp.created)
        if cp.modified:
            metadata["modified_date"] = normalize_value(cp.modified)
    finally:
        wb.close()
    metadata.update(file_metadata(filename, "xlsx"))
    return ParseResult(text="\n".join(parts), metadata=metadata)
