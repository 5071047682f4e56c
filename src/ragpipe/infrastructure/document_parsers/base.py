"""Base protocol for document parsers."""

from typing import Protocol


class ParseResult:
    """Result of parsing a file: extracted text and canonical metadata."""

    __slots__ = ("text", "metadata")

    def __init__(self, text: str, metadata: dict[str, str]) -> None:
        self.text = text
        self.metadata = metadata


class DocumentParser(Protocol):
    """Parser that extracts text and metadata from file bytes."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Extract text and metadata. Raises DocumentParseError on a corrupted file."""
        ...
