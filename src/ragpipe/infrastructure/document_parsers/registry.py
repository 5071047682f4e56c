"""Parser lookup by file extension or MIME type."""

from pathlib import Path

from ragpipe.domain.exceptions import UnsupportedFormatError
from ragpipe.infrastructure.document_parsers.base import DocumentParser, ParseResult
from ragpipe.infrastructure.document_parsers.docx_parser import parse_docx
from ragpipe.infrastructure.document_parsers.epub_parser import parse_epub
from ragpipe.infrastructure.document_parsers.pdf_parser import parse_pdf
from ragpipe.infrastructure.document_parsers.pptx_parser import parse_pptx
from ragpipe.infrastructure.document_parsers.text_parser import (
    parse_csv,
    parse_md,
    parse_tsv,
    parse_txt,
)
from ragpipe.infrastructure.document_parsers.xlsx_parser import parse_xlsx

_OOXML = "application/vnd.openxmlformats-officedocument"

# (extensions, MIME types, parser) per supported format
_FORMATS: tuple[tuple[tuple[str, ...], tuple[str, ...], DocumentParser], ...] = (
    (("txt",), ("text/plain",), parse_txt),
    (("md", "markdown"), ("text/markdown",), parse_md),
    (("csv",), ("text/csv",), parse_csv),
    (("tsv",), ("text/tab-separated-values",), parse_tsv),
    (("pdf",), ("application/pdf",), parse_pdf),
    (("docx",), (f"{_OOXML}.wordprocessingml.document",), parse_docx),
    (("xlsx",), (f"{_OOXML}.spreadsheetml.sheet",), parse_xlsx),
    (("pptx",), (f"{_OOXML}.presentationml.presentation",), parse_pptx),
    (("epub",), ("application/epub+zip",), parse_epub),
)

_BY_EXTENSION: dict[str, DocumentParser] = {
    ext: parser for exts, _, parser in _FORMATS for ext in exts
}
_BY_MIME: dict[str, DocumentParser] = {
    mime: parser for _, mimes, parser in _FORMATS for mime in mimes
}


def get_parser_for_filename(filename: str | None) -> DocumentParser | None:
    """Parser for the file's extension (case-insensitive), or None."""
    if not filename:
        return None
    return _BY_EXTENSION.get(Path(filename).suffix.lstrip(".").lower())


def get_parser_for_content_type(content_type: str | None) -> DocumentParser | None:
    """Parser for a MIME type; parameters such as charset are ignored."""
    if not content_type:
        return None
    return _BY_MIME.get(content_type.split(";", 1)[0].strip().lower())


def is_supported(filename: str | None) -> bool:
    return get_parser_for_filename(filename) is not None


def parse_file(
    data: bytes,
    filename: str | None = None,
    content_type: str | None = None,
) -> ParseResult:
    """Parse file bytes, choosing the parser by filename first, then content_type.

    Raises UnsupportedFormatError when neither matches; parsers raise
    DocumentParseError for corrupted input.
    """
    parser = get_parser_for_filename(filename) or get_parser_for_content_type(content_type)
    if parser is None:
        kind = Path(filename).suffix if filename else content_type
        raise UnsupportedFormatError(f"No parser for file type: {kind or 'none'}", filename)
    return parser(data, filename)


def supported_extensions() -> list[str]:
    return sorted(_BY_EXTENSION)
