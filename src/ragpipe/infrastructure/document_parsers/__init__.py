"""Document parsers: extract text and metadata from files."""

from ragpipe.infrastructure.document_parsers.base import ParseResult
from ragpipe.infrastructure.document_parsers.registry import (
    is_supported,
    parse_file,
    supported_extensions,
)

__all__ = ["ParseResult", "is_supported", "parse_file", "supported_extensions"]
