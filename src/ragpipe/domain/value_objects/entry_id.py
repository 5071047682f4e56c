"""Stable store entry identifier."""

from dataclasses import dataclass
from uuid import NAMESPACE_URL, uuid5


@dataclass(frozen=True)
class EntryId:
    """Identifier of a store entry, derived from chunk source and position."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Entry id must not be empty")

    @classmethod
    def for_chunk(cls, source: str, index: int) -> "EntryId":
        """Same source and index always give the same id."""
        if index < 0:
            raise ValueError("Chunk index must be non-negative")
        return cls(str(uuid5(NAMESPACE_URL, f"{source}#{index}")))

    def __str__(self) -> str:
        return self.value
