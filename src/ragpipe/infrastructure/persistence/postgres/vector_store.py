"""PostgreSQL vector store on the pgvector extension."""

from typing import Any

import structlog
from psycopg import sql
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from ragpipe.domain.entities import Chunk, EmbeddingVector, ScoredEntry, StoreEntry
from ragpipe.domain.exceptions import InvalidConfigError, ValidationError

logger = structlog.get_logger()


def _row_to_scored_entry(row: tuple[Any, ...]) -> ScoredEntry:
    """Map (id, source, position, content, metadata, embedding, score) to ScoredEntry."""
    entry_id, source, position, content, metadata, embedding, score = row
    chunk = Chunk(source=source, index=position, text=content, metadata=dict(metadata or {}))
    return ScoredEntry(
        entry=StoreEntry(id=entry_id, chunk=chunk, vector=tuple(float(x) for x in embedding)),
        score=float(score),
    )


class PgVectorStore:
    """Vector store in a pgvector table; score is cosine similarity (1 - cosine distance)."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        dimension: int,
        table: str = "store_entry",
    ) -> None:
        if dimension < 1:
            raise InvalidConfigError(f"dimension must be positive, got {dimension}")
        self._pool = pool
        self._dimension = dimension
        self._table = sql.Identifier(table)

    @property
    def dimension(self) -> int:
        return self._dimension

    def _check_dimension(self, vector: EmbeddingVector, identifier: str | None = None) -> None:
        if len(vector) != self._dimension:
            raise ValidationError(
                f"Embedding dimension mismatch: expected {self._dimension}, got {len(vector)}",
                identifier,
            )

    async def load(self) -> None:
        """Open the pool and create the extension and table if missing."""
        await self._pool.open()
        async with self._pool.connection() as conn:
            await conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
            await conn.execute(
                sql.SQL(
                    "CREATE TABLE IF NOT EXISTS {table} ("
                    "id TEXT PRIMARY KEY, "
                    "source TEXT NOT NULL, "
                    "position INTEGER NOT NULL, "
                    "content TEXT NOT NULL, "
                    "metadata JSONB NOT NULL DEFAULT '{{}}'::jsonb, "
                    "embedding vector({dimension}) NOT NULL)"
                ).format(table=self._table, dimension=sql.Literal(self._dimension))
            )
        logger.info("pg_vector_store_ready", dimension=self._dimension)

    async def upsert(self, entries: list[StoreEntry]) -> None:
        """Insert entries, overwriting rows with the same id."""
        for entry in entries:
            self._check_dimension(entry.vector, entry.id)
        query = sql.SQL(
            "INSERT INTO {table} (id, source, position, content, metadata, embedding) "
            "VALUES (%s, %s, %s, %s, %s, %s::vector) "
            "ON CONFLICT (id) DO UPDATE SET source = EXCLUDED.source, "
            "position = EXCLUDED.position, content = EXCLUDED.content, "
            "metadata = EXCLUDED.metadata, embedding = EXCLUDED.embedding"
        ).format(table=self._table)
        async with self._pool.connection() as conn:
            for e in entries:
                await conn.execute(
                    query,
                    (
                        e.id,
                        e.chunk.source,
                        e.chunk.index,
                        e.chunk.text,
                        Jsonb(e.chunk.metadata),
                        list(e.vector),
                    ),
                )

    async def query(self, vector: EmbeddingVector, k: int) -> list[ScoredEntry]:
        """Top k entries by cosine similarity, best first."""
        if k < 1:
            raise InvalidConfigError(f"k must be positive, got {k}")
        self._check_dimension(vector)
        query_vector = list(vector)
        query = sql.SQL(
            "SELECT id, source, position, content, metadata, embedding::real[], "
            "1 - (embedding <=> %s::vector) AS score "
            "FROM {table} ORDER BY embedding <=> %s::vector, id LIMIT %s"
        ).format(table=self._table)
        async with self._pool.connection() as conn:
            cur = await conn.execute(query, (query_vector, query_vector, k))
            rows = await cur.fetchall()
        return [_row_to_scored_entry(r) for r in rows]

    async def delete(self, entry_id: str) -> None:
        """Delete entry by id; unknown ids are ignored."""
        async with self._pool.connection() as conn:
            await conn.execute(
                sql.SQL("DELETE FROM {table} WHERE id = %s").format(table=self._table),
                (entry_id,),
            )

    async def prune(self, source: str, keep: int) -> int:
        """Delete entries of source with chunk index >= keep; return how many."""
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                sql.SQL("DELETE FROM {table} WHERE source = %s AND position >= %s").format(
                    table=self._table
                ),
                (source, keep),
            )
        return max(cur.rowcount, 0)

    async def count(self) -> int:
        async with self._pool.connection() as conn:
            cur = await conn.execute(
                sql.SQL("SELECT count(*) FROM {table}").format(table=self._table)
            )
            row = await cur.fetchone()
        return int(row[0]) if row else 0

    async def persist(self) -> None:
        # Every write is committed when its connection returns to the pool.
        pass

    async def close(self) -> None:
        await self._pool.close()
