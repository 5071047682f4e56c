"""Document entity."""

from dataclasses import dataclass, field

from ragpipe.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Document:
    """Loaded document: extracted text plus source path and metadata."""

    source: str
    text: str
    metadata: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.text:
            raise ValidationError("Document text must not be empty", self.source)
