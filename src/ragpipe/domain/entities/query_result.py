"""Query result - ordered retrieval output for one query."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from ragpipe.domain.entities.store_entry import ScoredEntry


@dataclass
class QueryResult:
    """Entries ordered by similarity, or by MMR rank."""

    query_id: str
    query: str
    entries: list[ScoredEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ScoredEntry]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def texts(self) -> list[str]:
        return [e.text for e in self.entries]

    def sources(self) -> list[str]:
        """Distinct chunk sources in result order."""
        seen: list[str] = []
        for e in self.entries:
            if e.entry.chunk.source not in seen:
                seen.append(e.entry.chunk.source)
        return seen
