"""Canonical metadata keys for document metadata (unified across file formats)."""

from pathlib import Path

# Canonical keys used in Document.metadata; parsers map format-specific keys to these.
CANONICAL_KEYS = (
    "title",
    "author",
    "created_date",
    "modified_date",
    "page_count",
    "language",
    "source_file_name",
    "source_file_type",
)

# Parser-specific key -> canonical key
PARSER_KEY_TO_CANONICAL: dict[str, str] = {
    # docx / OOXML
    "title": "title",
    "subject": "title",
    "author": "author",
    "creator": "author",
    "created": "created_date",
    "modified": "modified_date",
    "last_modified_by": "author",
    "language": "language",
    # pdf
    "/Title": "title",
    "/Author": "author",
    "/CreationDate": "created_date",
    "/ModDate": "modified_date",
    "/Lang": "language",
    # epub (Dublin Core)
    "dc:title": "title",
    "dc:creator": "author",
    "dc:language": "language",
    "dc:date": "created_date",
}


def normalize_value(value: object) -> str:
    """Convert a metadata value to its string form; dates become ISO strings."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def file_metadata(filename: str | None, file_type: str | None) -> dict[str, str]:
    """source_file_name / source_file_type entries for a parsed file."""
    metadata: dict[str, str] = {}
    if filename:
        metadata["source_file_name"] = Path(filename).name
        if file_type:
            metadata["source_file_type"] = file_type
    return metadata
