"""Retry policy DTO for external service calls."""

from dataclasses import dataclass

from ragpipe.domain.exceptions import InvalidConfigError


@dataclass(frozen=True)
class RetryPolicy:
    """Per-call timeout plus a fixed attempt budget with exponential backoff."""

    max_attempts: int = 3
    initial_backoff: float = 0.5
    max_backoff: float = 8.0
    timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise InvalidConfigError(f"max_attempts must be positive, got {self.max_attempts}")
        if self.initial_backoff < 0 or self.max_backoff < 0:
            raise InvalidConfigError("backoff must not be negative")
        if self.timeout <= 0:
            raise InvalidConfigError(f"timeout must be positive, got {self.timeout}")

    def backoff(self, attempt: int) -> float:
        """Delay after the given 0-based failed attempt."""
        return min(self.initial_backoff * (2**attempt), self.max_backoff)
