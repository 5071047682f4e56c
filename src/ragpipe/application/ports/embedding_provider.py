"""Embedding provider port - OpenAI compatible API."""

from typing import Protocol

from ragpipe.domain.entities import EmbeddingVector


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings.

    Raises EmbeddingServiceError; ``transient`` tells whether a retry may help.
    """

    async def embed(self, texts: list[str]) -> list[EmbeddingVector]: ...
