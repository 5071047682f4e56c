"""Tests for the composition root and the assembled pipeline."""

from pathlib import Path

import pytest

from ragpipe.config import Settings
from ragpipe.domain.exceptions import InvalidConfigError, NotFoundError
from ragpipe.infrastructure.persistence.postgres.vector_store import PgVectorStore
from ragpipe.infrastructure.vector_store.memory_store import InMemoryVectorStore
from ragpipe.main import create_pipeline, create_vector_store

from tests.conftest import FakeEmbeddingProvider, FakeGenerationProvider


def _settings(tmp_path: Path, **overrides: object) -> Settings:
    values: dict[str, object] = {
        "embedding_api_key": "test",
        "generation_api_key": "test",
        "chunk_size": 60,
        "chunk_overlap": 10,
        "retrieval_k": 2,
        "retrieval_fetch_k": 4,
        "vector_store_path": tmp_path / "store" / "vectors.json",
        "retry_initial_backoff": 0.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_invalid_config_fails_before_any_work(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        create_pipeline(_settings(tmp_path, chunk_size=50, chunk_overlap=80))


def test_memory_backend_selected(tmp_path: Path) -> None:
    store = create_vector_store(_settings(tmp_path))
    assert isinstance(store, InMemoryVectorStore)


@pytest.mark.asyncio
async def test_postgres_backend_selected(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path, vector_store_backend="postgres", embedding_dimensions=8, vector_table="chunks"
    )
    store = create_vector_store(settings)
    assert isinstance(store, PgVectorStore)
    assert store.dimension == 8


@pytest.mark.asyncio
async def test_embedding_dimensions_reach_provider_and_store(tmp_path: Path) -> None:
    settings = _settings(tmp_path, vector_store_backend="postgres", embedding_dimensions=256)

    pipeline = create_pipeline(settings)

    assert pipeline.ingest._embedding_provider._dimensions == 256
    assert pipeline.retrieve._embedding_provider._dimensions == 256
    assert pipeline.store.dimension == 256


@pytest.mark.asyncio
async def test_ingest_persist_reload_and_answer(tmp_path: Path) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "cats.txt").write_text(
        "Cats sleep for most of the day. They are crepuscular hunters.", encoding="utf-8"
    )
    (docs / "dogs.md").write_text(
        "# Dogs\n\nDogs were domesticated from wolves thousands of years ago.",
        encoding="utf-8",
    )
    (docs / "image.png").write_bytes(b"\x89PNG")
    settings = _settings(tmp_path, chunk_size=200, chunk_overlap=20)
    embedding_provider = FakeEmbeddingProvider()
    generation_provider = FakeGenerationProvider()

    async with create_pipeline(
        settings,
        embedding_provider=embedding_provider,
        generation_provider=generation_provider,
    ) as pipeline:
        report = await pipeline.ingest_path(docs)
        assert report.document_count == 2
        assert report.chunk_count == 2
        assert [Path(f.source).name for f in report.failures] == ["image.png"]
        assert settings.vector_store_path.exists()

    async with create_pipeline(
        settings,
        embedding_provider=embedding_provider,
        generation_provider=generation_provider,
    ) as reloaded:
        assert await reloaded.store.count() == report.chunk_count
        result = await reloaded.search(
            "Cats sleep for most of the day. They are crepuscular hunters."
        )
        assert result.entries[0].entry.chunk.source.endswith("cats.txt")

        transcript = reloaded.new_transcript()
        answer = await reloaded.ask("When do cats hunt?", transcript)
        assert answer.answered
        assert answer.text == "answer to: When do cats hunt?"
        assert len(transcript) == 2
        assert transcript.max_chars == settings.transcript_max_chars


@pytest.mark.asyncio
async def test_ingest_missing_path_raises(tmp_path: Path) -> None:
    pipeline = create_pipeline(
        _settings(tmp_path),
        embedding_provider=FakeEmbeddingProvider(),
        generation_provider=FakeGenerationProvider(),
    )
    with pytest.raises(NotFoundError):
        await pipeline.ingest_path(tmp_path / "nope")
