"""Responder configuration DTO."""

from dataclasses import dataclass

from ragpipe.domain.exceptions import InvalidConfigError

NO_ANSWER_TEXT = "I could not find any relevant information to answer this question."


@dataclass(frozen=True)
class ResponderConfig:
    """Context size limit and the reply used when nothing was retrieved."""

    max_context_chars: int = 8000
    no_answer_text: str = NO_ANSWER_TEXT

    def __post_init__(self) -> None:
        if self.max_context_chars < 1:
            raise InvalidConfigError(
                f"max_context_chars must be positive, got {self.max_context_chars}"
            )
