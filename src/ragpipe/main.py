"""Composition root: wire loader, chunker, indexer and responder from settings."""

from dataclasses import dataclass
from pathlib import Path

import structlog

from ragpipe.application.dto.reports import Answer, IngestReport
from ragpipe.application.ports import (
    DocumentLoader,
    EmbeddingProvider,
    GenerationProvider,
    VectorStore,
)
from ragpipe.application.use_cases.answer.answer_question import AnswerQuestionUseCase
from ragpipe.application.use_cases.ingest.ingest_documents import IngestDocumentsUseCase
from ragpipe.application.use_cases.search.retrieve import RetrieveUseCase
from ragpipe.config import Settings, get_settings
from ragpipe.domain.entities import ConversationTranscript, QueryResult
from ragpipe.infrastructure.chunking.recursive_chunker import RecursiveChunker
from ragpipe.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from ragpipe.infrastructure.generation.openai_provider import OpenAIGenerationProvider
from ragpipe.infrastructure.loading.file_loader import FileSystemDocumentLoader
from ragpipe.infrastructure.persistence.postgres.connection import create_pool
from ragpipe.infrastructure.persistence.postgres.vector_store import PgVectorStore
from ragpipe.infrastructure.vector_store.memory_store import InMemoryVectorStore
from ragpipe.log_config import configure_logging

logger = structlog.get_logger()


@dataclass
class RagPipeline:
    """The four stages with explicit handoffs between them."""

    loader: DocumentLoader
    ingest: IngestDocumentsUseCase
    retrieve: RetrieveUseCase
    answer: AnswerQuestionUseCase
    store: VectorStore
    transcript_max_chars: int = 4000

    async def open(self) -> None:
        await self.store.load()

    async def close(self) -> None:
        await self.store.close()

    async def __aenter__(self) -> "RagPipeline":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def ingest_path(self, target: str | Path) -> IngestReport:
        """Load documents from target, ingest them and persist the store."""
        load_report = self.loader.load(target)
        report = await self.ingest.execute(load_report.documents)
        report.failures = load_report.failures
        await self.store.persist()
        if load_report.failures:
            logger.warning("ingest_partial_failure", summary=load_report.summary())
        return report

    async def search(self, query: str) -> QueryResult:
        return await self.retrieve.execute(query)

    async def ask(self, question: str, transcript: ConversationTranscript | None = None) -> Answer:
        return await self.answer.execute(question, transcript)

    def new_transcript(self) -> ConversationTranscript:
        return ConversationTranscript(max_chars=self.transcript_max_chars)


def create_vector_store(settings: Settings) -> VectorStore:
    """Vector store for the configured backend."""
    if settings.vector_store_backend == "postgres":
        return PgVectorStore(
            pool=create_pool(settings.database_url),
            dimension=settings.embedding_dimensions,
            table=settings.vector_table,
        )
    return InMemoryVectorStore(path=settings.vector_store_path)


def create_pipeline(
    settings: Settings | None = None,
    *,
    vector_store: VectorStore | None = None,
    embedding_provider: EmbeddingProvider | None = None,
    generation_provider: GenerationProvider | None = None,
) -> RagPipeline:
    """Composition root - build the pipeline with all dependencies.

    Configuration errors surface here, before any document is processed.
    Collaborators passed in explicitly replace the ones built from settings.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    chunking_config = settings.chunking_config()
    retrieval_config = settings.retrieval_config()
    responder_config = settings.responder_config()
    retry_policy = settings.retry_policy()

    store = vector_store or create_vector_store(settings)
    embedding_provider = embedding_provider or OpenAIEmbeddingProvider(
        base_url=settings.embedding_api_url,
        api_key=settings.embedding_api_key,
        model=settings.embedding_model,
        dimensions=settings.embedding_dimensions,
        timeout=settings.request_timeout,
    )
    generation_provider = generation_provider or OpenAIGenerationProvider(
        base_url=settings.generation_api_url,
        api_key=settings.generation_api_key,
        model=settings.generation_model,
        temperature=settings.generation_temperature,
        timeout=settings.request_timeout,
    )

    ingest = IngestDocumentsUseCase(
        chunker=RecursiveChunker(),
        embedding_provider=embedding_provider,
        vector_store=store,
        chunking_config=chunking_config,
        retry_policy=retry_policy,
        batch_size=settings.embedding_batch_size,
        concurrency=settings.embedding_concurrency,
    )
    retrieve = RetrieveUseCase(
        embedding_provider=embedding_provider,
        vector_store=store,
        retry_policy=retry_policy,
        config=retrieval_config,
    )
    answer = AnswerQuestionUseCase(
        retriever=retrieve,
        generation_provider=generation_provider,
        retry_policy=retry_policy,
        config=responder_config,
    )
    return RagPipeline(
        loader=FileSystemDocumentLoader(),
        ingest=ingest,
        retrieve=retrieve,
        answer=answer,
        store=store,
        transcript_max_chars=settings.transcript_max_chars,
    )
