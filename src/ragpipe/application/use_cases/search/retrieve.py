"""Retrieve use case - similarity or MMR search."""

import asyncio
from uuid import uuid4

import structlog

from ragpipe.application.dto.retrieval_config import RetrievalConfig
from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.application.ports import EmbeddingProvider, VectorStore
from ragpipe.application.services.mmr import mmr_select
from ragpipe.application.services.retry import Sleep, call_with_retry
from ragpipe.domain.entities import QueryResult
from ragpipe.domain.exceptions import EmbeddingServiceError
from ragpipe.domain.value_objects import SearchMode

logger = structlog.get_logger()


class RetrieveUseCase:
    """Embed a query and return the best matching store entries."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        retry_policy: RetryPolicy,
        config: RetrievalConfig,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._retry_policy = retry_policy
        self._config = config
        self._sleep = sleep

    async def execute(self, query: str, config: RetrievalConfig | None = None) -> QueryResult:
        """Execute retrieval with the given config, or the default one."""
        config = config or self._config
        query_id = uuid4().hex
        if not query.strip():
            logger.warning("empty_query_provided", query_id=query_id)
            return QueryResult(query_id=query_id, query=query)

        vectors = await call_with_retry(
            lambda: self._embedding_provider.embed([query]),
            self._retry_policy,
            error_type=EmbeddingServiceError,
            identifier=query_id,
            sleep=self._sleep,
        )
        if len(vectors) != 1:
            raise EmbeddingServiceError(f"Expected 1 query embedding, got {len(vectors)}", query_id)
        vector = tuple(vectors[0])

        if config.mode == SearchMode.MMR:
            candidates = await self._vector_store.query(vector, config.fetch_k)
            entries = mmr_select(candidates, config.k, config.lambda_mult)
        else:
            candidates = await self._vector_store.query(vector, config.k)
            entries = candidates[: config.k]

        logger.info(
            "retrieval_completed",
            query_id=query_id,
            mode=str(config.mode),
            candidates=len(candidates),
            results_returned=len(entries),
            top_score=entries[0].score if entries else None,
        )
        return QueryResult(query_id=query_id, query=query, entries=entries)
