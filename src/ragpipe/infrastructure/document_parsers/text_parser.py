"""Parser for plain text, markdown, CSV, TSV."""

import csv
import io
from pathlib import Path

from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.metadata_keys import file_metadata


def decode_text(data: bytes) -> str:
    """Decode as UTF-8, then cp1251, then UTF-8 with replacement characters."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        try:
            return data.decode("cp1251")
        except UnicodeDecodeError:
            return data.decode("utf-8", errors="replace")


def parse_text(data: bytes, filename: str | None = None) -> ParseResult:
    """Treat as text. No metadata except source_file_name/type."""
    suffix = Path(filename).suffix.lstrip(".").lower() if filename else ""
    return ParseResult(text=decode_text(data), metadata=file_metadata(filename, suffix or None))


def parse_csv_tsv(data: bytes, filename: str | None = None, delimiter: str = ",") -> ParseResult:
    """Parse CSV or TSV: one line per row, non-empty cells joined by spaces."""
    decoded = data.decode("utf-8", errors="replace")
    reader = csv.reader(io.StringIO(decoded), delimiter=delimiter)
    lines = [" ".join(cell.strip() for cell in row if cell.strip()) for row in reader]
    text = "\n".join(line for line in lines if line)
    file_type = "csv" if delimiter == "," else "tsv"
    return ParseResult(text=text, metadata=file_metadata(filename, file_type))


def parse_txt(data: bytes, filename: str | None = None) -> ParseResult:
    """Plain text (.txt)."""
    return parse_text(data, filename)


def parse_md(data: bytes, filename: str | None = None) -> ParseResult:
    """Markdown (.md) - kept as-is, headings included."""
    return parse_text(data, filename)


def parse_csv(data: bytes, filename: str | None = None) -> ParseResult:
    """CSV."""
    return parse_csv_tsv(data, filename, delimiter=",")


def parse_tsv(data: bytes, filename: str | None = None) -> ParseResult:
    """TSV."""
    return parse_csv_tsv(data, filename, delimiter="\t")
