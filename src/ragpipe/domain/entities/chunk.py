"""Chunk entity - bounded text segment of a document."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chunk:
    """Chunk - contiguous segment of a document's text."""

    source: str
    index: int
    text: str
    metadata: dict[str, str] = field(default_factory=dict)
