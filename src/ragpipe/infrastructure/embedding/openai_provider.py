"""OpenAI-compatible embedding provider."""

import openai
from openai import AsyncOpenAI

from ragpipe.domain.entities import EmbeddingVector
from ragpipe.domain.exceptions import EmbeddingServiceError
from ragpipe.infrastructure.openai_errors import is_transient


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API.

    Client-side retries are disabled; callers apply their own retry policy.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        *,
        dimensions: int | None = None,
        timeout: float = 30.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model
        self._dimensions = dimensions

    async def embed(self, texts: list[str]) -> list[EmbeddingVector]:
        """Generate embeddings for texts, in input order."""
        if not texts:
            return []
        extra = {"dimensions": self._dimensions} if self._dimensions else {}
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts,
                **extra,
            )
        except openai.APIError as e:
            raise EmbeddingServiceError(
                f"Embedding request failed: {e}", transient=is_transient(e)
            ) from e
        data = sorted(response.data, key=lambda d: d.index)
        return [tuple(d.embedding) for d in data]
