"""Domain entities."""

from ragpipe.domain.entities.chunk import Chunk
from ragpipe.domain.entities.conversation import ConversationTranscript, Turn
from ragpipe.domain.entities.document import Document
from ragpipe.domain.entities.query_result import QueryResult
from ragpipe.domain.entities.store_entry import EmbeddingVector, ScoredEntry, StoreEntry

__all__ = [
    "Chunk",
    "ConversationTranscript",
    "Document",
    "EmbeddingVector",
    "QueryResult",
    "ScoredEntry",
    "StoreEntry",
    "Turn",
]
