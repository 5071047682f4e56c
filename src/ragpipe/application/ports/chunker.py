"""Chunker port - text splitting strategies."""

from typing import Protocol

from ragpipe.application.dto.chunking_config import ChunkingConfig
from ragpipe.domain.entities import Chunk, Document


class Chunker(Protocol):
    """Port for splitting text into chunks."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]: ...

    def chunk_document(self, document: Document, config: ChunkingConfig) -> list[Chunk]: ...
