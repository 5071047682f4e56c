"""Answer question use case - retrieval followed by generation."""

import asyncio

import structlog

from ragpipe.application.dto.reports import Answer
from ragpipe.application.dto.responder_config import ResponderConfig
from ragpipe.application.dto.retrieval_config import RetrievalConfig
from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.application.ports import GenerationProvider
from ragpipe.application.services.retry import Sleep, call_with_retry
from ragpipe.application.use_cases.search.retrieve import RetrieveUseCase
from ragpipe.domain.entities import ConversationTranscript
from ragpipe.domain.exceptions import GenerationServiceError

logger = structlog.get_logger()

CONTEXT_SEPARATOR = "\n\n"


def build_context(texts: list[str], max_chars: int) -> str:
    """Join chunk texts in order, stopping before max_chars is exceeded.

    The first text is always included, cut at max_chars if needed.
    """
    parts: list[str] = []
    total = 0
    for text in texts:
        added = len(text) + (len(CONTEXT_SEPARATOR) if parts else 0)
        if total + added > max_chars:
            if not parts:
                parts.append(text[:max_chars])
            break
        parts.append(text)
        total += added
    return CONTEXT_SEPARATOR.join(parts)


class AnswerQuestionUseCase:
    """Retrieve context for a question and ask the generation service."""

    def __init__(
        self,
        retriever: RetrieveUseCase,
        generation_provider: GenerationProvider,
        retry_policy: RetryPolicy,
        config: ResponderConfig,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._retriever = retriever
        self._generation_provider = generation_provider
        self._retry_policy = retry_policy
        self._config = config
        self._sleep = sleep

    async def execute(
        self,
        question: str,
        transcript: ConversationTranscript | None = None,
        retrieval_config: RetrievalConfig | None = None,
    ) -> Answer:
        """Answer the question; with nothing retrieved, reply without generating."""
        result = await self._retriever.execute(question, retrieval_config)

        if result.is_empty:
            logger.info("no_context_retrieved", query_id=result.query_id)
            answer = Answer(text=self._config.no_answer_text, answered=False, result=result)
        else:
            context = build_context(result.texts(), self._config.max_context_chars)
            if transcript is not None and len(transcript):
                context = f"Conversation so far:\n{transcript.render()}\n\n{context}"
            text = await call_with_retry(
                lambda: self._generation_provider.generate(context, question),
                self._retry_policy,
                error_type=GenerationServiceError,
                identifier=result.query_id,
                sleep=self._sleep,
            )
            logger.info(
                "answer_generated",
                query_id=result.query_id,
                context_chars=len(context),
                answer_chars=len(text),
            )
            answer = Answer(text=text, answered=True, result=result)

        if transcript is not None:
            transcript.add("user", question)
            transcript.add("assistant", answer.text)
        return answer
