"""In-memory vector store with JSON file persistence."""

import asyncio
import json
import os
from pathlib import Path
from typing import Any

import structlog

from ragpipe.application.services.mmr import cosine_similarity
from ragpipe.domain.entities import Chunk, EmbeddingVector, ScoredEntry, StoreEntry
from ragpipe.domain.exceptions import InvalidConfigError, ValidationError

logger = structlog.get_logger()

FORMAT_VERSION = 1


class InMemoryVectorStore:
    """Exact cosine-similarity search over entries kept in a dict.

    With a path, ``persist`` writes all entries to a JSON file and ``load``
    reads them back; a missing file loads as an empty store.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._entries: dict[str, StoreEntry] = {}
        self._dimension: int | None = None

    @property
    def dimension(self) -> int | None:
        return self._dimension

    async def upsert(self, entries: list[StoreEntry]) -> None:
        """Insert or replace entries by id. All vectors must share one dimension."""
        if not entries:
            return
        expected = self._dimension if self._dimension is not None else entries[0].dimension
        for entry in entries:
            if entry.dimension != expected:
                raise ValidationError(
                    f"Embedding dimension mismatch: expected {expected}, got {entry.dimension}",
                    entry.id,
                )
        self._dimension = expected
        for entry in entries:
            self._entries[entry.id] = entry

    async def query(self, vector: EmbeddingVector, k: int) -> list[ScoredEntry]:
        """Top k entries by cosine similarity, best first; ties keep insertion order."""
        if k < 1:
            raise InvalidConfigError(f"k must be positive, got {k}")
        if not self._entries:
            return []
        if len(vector) != self._dimension:
            raise ValidationError(
                f"Query dimension mismatch: expected {self._dimension}, got {len(vector)}"
            )
        scored = [
            ScoredEntry(entry=entry, score=cosine_similarity(vector, entry.vector))
            for entry in self._entries.values()
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored[:k]

    async def get(self, entry_id: str) -> StoreEntry | None:
        return self._entries.get(entry_id)

    async def delete(self, entry_id: str) -> None:
        """Delete entry by id; unknown ids are ignored."""
        self._entries.pop(entry_id, None)
        if not self._entries:
            self._dimension = None

    async def prune(self, source: str, keep: int) -> int:
        """Delete entries of source with chunk index >= keep; return how many."""
        stale = [
            entry_id
            for entry_id, entry in self._entries.items()
            if entry.chunk.source == source and entry.chunk.index >= keep
        ]
        for entry_id in stale:
            del self._entries[entry_id]
        if not self._entries:
            self._dimension = None
        return len(stale)

    async def count(self) -> int:
        return len(self._entries)

    async def persist(self) -> None:
        """Write entries to the JSON file, replacing it atomically."""
        if self._path is None:
            logger.debug("vector_store_persist_skipped", reason="no_path")
            return
        payload = {
            "version": FORMAT_VERSION,
            "dimension": self._dimension,
            "entries": [_entry_to_dict(e) for e in self._entries.values()],
        }
        await asyncio.to_thread(_write_json, self._path, payload)
        logger.info("vector_store_persisted", path=str(self._path), entry_count=len(self._entries))

    async def load(self) -> None:
        """Replace the contents with the JSON file's entries, if the file exists."""
        if self._path is None or not self._path.exists():
            logger.info("vector_store_empty", path=str(self._path) if self._path else None)
            return
        try:
            payload = await asyncio.to_thread(_read_json, self._path)
        except (OSError, json.JSONDecodeError) as e:
            raise ValidationError(f"Cannot read vector store file: {e}", str(self._path)) from e
        version = payload.get("version") if isinstance(payload, dict) else None
        if version != FORMAT_VERSION:
            raise ValidationError(
                f"Unsupported vector store format version: {version}",
                str(self._path),
            )
        self._entries = {}
        self._dimension = None
        await self.upsert([_entry_from_dict(d) for d in payload.get("entries", [])])
        logger.info("vector_store_loaded", path=str(self._path), entry_count=len(self._entries))

    async def close(self) -> None:
        pass


def _entry_to_dict(entry: StoreEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "source": entry.chunk.source,
        "index": entry.chunk.index,
        "text": entry.chunk.text,
        "metadata": entry.chunk.metadata,
        "vector": list(entry.vector),
    }


def _entry_from_dict(data: dict[str, Any]) -> StoreEntry:
    chunk = Chunk(
        source=data["source"],
        index=data["index"],
        text=data["text"],
        metadata=dict(data.get("metadata", {})),
    )
    return StoreEntry(id=data["id"], chunk=chunk, vector=tuple(data["vector"]))


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f)
    os.replace(tmp_path, path)


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)
