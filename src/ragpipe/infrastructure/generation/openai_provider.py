"""OpenAI-compatible chat generation provider."""

import openai
from openai import AsyncOpenAI

from ragpipe.domain.exceptions import GenerationServiceError
from ragpipe.infrastructure.openai_errors import is_transient

DEFAULT_SYSTEM_PROMPT = (
    "You answer questions using only the context provided below. "
    "If the context does not contain the answer, say that you do not know.\n\n"
    "Context:\n{context}"
)


class OpenAIGenerationProvider:
    """Generation provider using the chat completions API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        *,
        temperature: float = 0.0,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        timeout: float = 60.0,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model
        self._temperature = temperature
        self._system_prompt = system_prompt

    async def generate(self, context: str, question: str) -> str:
        """Answer question from context."""
        messages = [
            {"role": "system", "content": self._system_prompt.format(context=context)},
            {"role": "user", "content": question},
        ]
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=self._temperature,
            )
        except openai.APIError as e:
            raise GenerationServiceError(
                f"Generation request failed: {e}", transient=is_transient(e)
            ) from e
        if not response.choices:
            raise GenerationServiceError("Generation returned no choices")
        return (response.choices[0].message.content or "").strip()
