"""Pytest fixtures for ragpipe tests."""

from __future__ import annotations

import pytest

from ragpipe.application.dto.chunking_config import ChunkingConfig
from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.domain.entities import Chunk, EmbeddingVector, ScoredEntry, StoreEntry
from ragpipe.domain.value_objects import ChunkingStrategy

# --- Fake collaborators ---


class FakeEmbeddingProvider:
    """Deterministic embeddings: explicit vectors per text, else character histogram."""

    def __init__(
        self,
        dimension: int = 8,
        vectors: dict[str, EmbeddingVector] | None = None,
        failures: list[Exception] | None = None,
    ) -> None:
        self.dimension = dimension
        self.vectors = vectors or {}
        self.failures = list(failures or [])
        self.calls: list[list[str]] = []

    async def embed(self, texts: list[str]) -> list[EmbeddingVector]:
        self.calls.append(list(texts))
        if self.failures:
            raise self.failures.pop(0)
        return [self.vectors.get(t) or self._histogram(t) for t in texts]

    def _histogram(self, text: str) -> EmbeddingVector:
        v = [0.0] * self.dimension
        for ch in text:
            v[ord(ch) % self.dimension] += 1.0
        if not any(v):
            v[0] = 1.0
        return tuple(v)


class FakeGenerationProvider:
    """Records prompts; answers with a fixed format."""

    def __init__(self, failures: list[Exception] | None = None) -> None:
        self.failures = list(failures or [])
        self.calls: list[tuple[str, str]] = []

    async def generate(self, context: str, question: str) -> str:
        self.calls.append((context, question))
        if self.failures:
            raise self.failures.pop(0)
        return f"answer to: {question}"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_entry(
    entry_id: str,
    vector: EmbeddingVector,
    text: str | None = None,
    source: str = "doc.txt",
    index: int = 0,
) -> StoreEntry:
    """Store entry with a minimal chunk."""
    chunk = Chunk(source=source, index=index, text=text or f"text of {entry_id}")
    return StoreEntry(id=entry_id, chunk=chunk, vector=vector)


def make_scored(entry_id: str, vector: EmbeddingVector, score: float) -> ScoredEntry:
    return ScoredEntry(entry=make_entry(entry_id, vector), score=score)


# --- Fixtures ---


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Default chunking config for RecursiveChunker tests."""
    return ChunkingConfig(
        chunk_size=100,
        chunk_overlap=20,
        strategy=ChunkingStrategy.RECURSIVE,
    )


@pytest.fixture
def retry_policy() -> RetryPolicy:
    """Three attempts, short timeout, real backoff values (sleep is faked)."""
    return RetryPolicy(max_attempts=3, initial_backoff=0.5, max_backoff=8.0, timeout=1.0)


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def generation_provider() -> FakeGenerationProvider:
    return FakeGenerationProvider()
