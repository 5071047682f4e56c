"""Store entry - chunk paired with its embedding vector."""

from dataclasses import dataclass

from ragpipe.domain.entities.chunk import Chunk

EmbeddingVector = tuple[float, ...]


@dataclass(frozen=True)
class StoreEntry:
    """Chunk with vector embedding, addressed by a stable id."""

    id: str
    chunk: Chunk
    vector: EmbeddingVector

    @property
    def dimension(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class ScoredEntry:
    """Store entry with similarity to a query (higher is more similar)."""

    entry: StoreEntry
    score: float

    @property
    def text(self) -> str:
        return self.entry.chunk.text
