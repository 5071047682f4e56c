"""Recursive text chunker implementation."""

import structlog

from ragpipe.application.dto.chunking_config import ChunkingConfig
from ragpipe.domain.entities import Chunk, Document

logger = structlog.get_logger()


def _split_keep_separator(text: str, separator: str) -> list[str]:
    """Split text on separator, keeping it at the end of each piece."""
    if not separator:
        return list(text)
    parts = text.split(separator)
    pieces = [p + separator for p in parts[:-1]]
    if parts[-1]:
        pieces.append(parts[-1])
    return [p for p in pieces if p]


def _split_recursive(text: str, separators: tuple[str, ...], limit: int) -> list[str]:
    """Split text into pieces of at most limit characters.

    Pieces still too long after splitting on a separator are split again with
    the next one; the empty separator falls back to single characters.
    """
    if len(text) <= limit:
        return [text]
    separator, finer = separators[0], separators[1:]
    pieces: list[str] = []
    for piece in _split_keep_separator(text, separator):
        if len(piece) <= limit or not finer:
            pieces.append(piece)
        else:
            pieces.extend(_split_recursive(piece, finer, limit))
    return pieces


class RecursiveChunker:
    """Chunker using recursive separator splitting with character overlap.

    Adjacent pieces are merged up to chunk_size; the trailing chunk_overlap
    characters of each emitted chunk start the next one. Concatenating the
    chunks with the overlaps removed gives back the input text.
    """

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Split text into chunks with overlap."""
        if not text:
            return []

        size = config.chunk_size
        overlap = config.chunk_overlap
        if len(text) <= size:
            return [text]

        # Any piece must fit next to a carried-over overlap.
        pieces = _split_recursive(text, config.effective_separators, size - overlap)

        chunks: list[str] = []
        prefix = ""
        current = ""
        for piece in pieces:
            if current and len(prefix) + len(current) + len(piece) > size:
                emitted = prefix + current
                chunks.append(emitted)
                prefix = emitted[-overlap:] if overlap else ""
                current = ""
            current += piece
        if current:
            chunks.append(prefix + current)
        return chunks

    def chunk_document(self, document: Document, config: ChunkingConfig) -> list[Chunk]:
        """Split a document into Chunk entities carrying its metadata."""
        texts = self.chunk(document.text, config)
        chunks = [
            Chunk(
                source=document.source,
                index=i,
                text=text,
                metadata={**document.metadata, "chunk_index": str(i)},
            )
            for i, text in enumerate(texts)
        ]
        if chunks:
            logger.info(
                "text_chunked",
                source=document.source,
                text_length=len(document.text),
                chunk_count=len(chunks),
                avg_chunk_size=sum(len(c.text) for c in chunks) // len(chunks),
            )
        return chunks
