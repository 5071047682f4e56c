"""Vector store port - similarity-searchable store of embedded chunks."""

from typing import Protocol

from ragpipe.domain.entities import EmbeddingVector, ScoredEntry, StoreEntry


class VectorStore(Protocol):
    """Port for entry persistence and similarity search.

    ``query`` returns entries by descending score; higher score means more similar
    whatever distance the backend uses internally.
    """

    async def upsert(self, entries: list[StoreEntry]) -> None: ...

    async def query(self, vector: EmbeddingVector, k: int) -> list[ScoredEntry]: ...

    async def delete(self, entry_id: str) -> None: ...

    async def prune(self, source: str, keep: int) -> int:
        """Delete entries of source whose chunk index is keep or higher; return how many."""
        ...

    async def count(self) -> int: ...

    async def persist(self) -> None: ...

    async def load(self) -> None: ...

    async def close(self) -> None: ...
