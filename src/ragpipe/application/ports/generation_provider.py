"""Generation provider port - answers a question from supplied context."""

from typing import Protocol


class GenerationProvider(Protocol):
    """Port for text generation. Raises GenerationServiceError."""

    async def generate(self, context: str, question: str) -> str: ...
