"""Load, ingest and answer result DTOs."""

from dataclasses import dataclass, field

from ragpipe.domain.entities import Document, QueryResult
from ragpipe.domain.exceptions import RagPipeError


@dataclass
class LoadFailure:
    """A file that could not be turned into a document."""

    source: str
    error: RagPipeError

    @property
    def reason(self) -> str:
        return error_reason(self.error)


@dataclass
class LoadReport:
    """Documents loaded from a path, plus per-file failures."""

    documents: list[Document] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def summary(self) -> str:
        text = f"loaded {len(self.documents)} document(s), {len(self.failures)} failure(s)"
        if self.failures:
            text += ": " + "; ".join(f"{f.source}: {f.reason}" for f in self.failures)
        return text


@dataclass
class IngestReport:
    """Result of chunking, embedding and storing a batch of documents."""

    document_count: int = 0
    chunk_count: int = 0
    entry_ids: list[str] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)


@dataclass
class Answer:
    """Generated answer with the retrieval it was based on."""

    text: str
    answered: bool
    result: QueryResult

    @property
    def query_id(self) -> str:
        return self.result.query_id

    @property
    def sources(self) -> list[str]:
        return self.result.sources()


def error_reason(error: RagPipeError) -> str:
    return f"{type(error).__name__}: {error.message}"
