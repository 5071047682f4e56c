"""Application ports - interfaces for external adapters."""

from ragpipe.application.ports.chunker import Chunker
from ragpipe.application.ports.document_loader import DocumentLoader
from ragpipe.application.ports.embedding_provider import EmbeddingProvider
from ragpipe.application.ports.generation_provider import GenerationProvider
from ragpipe.application.ports.vector_store import VectorStore

__all__ = [
    "Chunker",
    "DocumentLoader",
    "EmbeddingProvider",
    "GenerationProvider",
    "VectorStore",
]
