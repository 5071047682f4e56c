"""Ingest documents use case."""

import asyncio
from collections.abc import Sequence

import structlog

from ragpipe.application.dto.chunking_config import ChunkingConfig
from ragpipe.application.dto.reports import IngestReport
from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.application.ports import Chunker, EmbeddingProvider, VectorStore
from ragpipe.application.services.retry import Sleep, call_with_retry
from ragpipe.domain.entities import Chunk, Document, StoreEntry
from ragpipe.domain.exceptions import EmbeddingServiceError, InvalidConfigError
from ragpipe.domain.value_objects import EntryId

logger = structlog.get_logger()


class IngestDocumentsUseCase:
    """Chunk documents, embed the chunks in batches and upsert them into the store."""

    def __init__(
        self,
        chunker: Chunker,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        chunking_config: ChunkingConfig,
        retry_policy: RetryPolicy,
        *,
        batch_size: int = 64,
        concurrency: int = 4,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if batch_size < 1:
            raise InvalidConfigError(f"batch_size must be positive, got {batch_size}")
        if concurrency < 1:
            raise InvalidConfigError(f"concurrency must be positive, got {concurrency}")
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._chunking_config = chunking_config
        self._retry_policy = retry_policy
        self._batch_size = batch_size
        self._concurrency = concurrency
        self._sleep = sleep

    async def execute(self, documents: Sequence[Document]) -> IngestReport:
        """Ingest documents. Embedding failures propagate once retries are spent.

        On failure the remaining batches are cancelled; batches that finished
        earlier stay in the store. After a successful run every source holds
        exactly its current chunks.
        """
        chunks: list[Chunk] = []
        chunk_counts: dict[str, int] = {}
        for document in documents:
            doc_chunks = self._chunker.chunk_document(document, self._chunking_config)
            logger.debug("document_chunked", source=document.source, chunk_count=len(doc_chunks))
            chunks.extend(doc_chunks)
            chunk_counts[document.source] = max(
                chunk_counts.get(document.source, 0), len(doc_chunks)
            )

        batches = [
            chunks[i : i + self._batch_size] for i in range(0, len(chunks), self._batch_size)
        ]
        semaphore = asyncio.Semaphore(self._concurrency)

        async def ingest_batch(batch: list[Chunk]) -> list[str]:
            ids = [str(EntryId.for_chunk(c.source, c.index)) for c in batch]
            async with semaphore:
                vectors = await call_with_retry(
                    lambda: self._embedding_provider.embed([c.text for c in batch]),
                    self._retry_policy,
                    error_type=EmbeddingServiceError,
                    identifier=ids[0],
                    sleep=self._sleep,
                )
                if len(vectors) != len(batch):
                    raise EmbeddingServiceError(
                        f"Expected {len(batch)} embeddings, got {len(vectors)}", ids[0]
                    )
                entries = [
                    StoreEntry(id=entry_id, chunk=chunk, vector=tuple(vector))
                    for entry_id, chunk, vector in zip(ids, batch, vectors, strict=True)
                ]
                await self._vector_store.upsert(entries)
            logger.debug("batch_ingested", entry_count=len(entries), first_entry_id=ids[0])
            return ids

        failure: Exception | None = None
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(ingest_batch(b)) for b in batches]
        except ExceptionGroup as eg:
            # Sibling batches are cancelled by now; surface the first failure.
            failure = eg.exceptions[0]
        if failure is not None:
            raise failure
        entry_ids = [entry_id for task in tasks for entry_id in task.result()]

        # Entries beyond a document's new chunk count are left over from a longer version.
        for source, chunk_count in chunk_counts.items():
            removed = await self._vector_store.prune(source, chunk_count)
            if removed:
                logger.debug("stale_entries_pruned", source=source, entry_count=removed)

        logger.info(
            "documents_ingested",
            document_count=len(documents),
            chunk_count=len(chunks),
            batch_count=len(batches),
        )
        return IngestReport(
            document_count=len(documents),
            chunk_count=len(chunks),
            entry_ids=entry_ids,
        )
