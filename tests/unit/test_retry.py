"""Unit tests for call_with_retry."""

import asyncio

import pytest

from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.application.services.retry import call_with_retry
from ragpipe.domain.exceptions import EmbeddingServiceError, GenerationServiceError

from tests.conftest import RecordingSleep


class FlakyOperation:
    """Raises the queued errors in order, then returns the value."""

    def __init__(self, errors: list[Exception], value: str = "ok") -> None:
        self.errors = list(errors)
        self.value = value
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.value


@pytest.mark.asyncio
async def test_succeeds_after_two_transient_failures(
    retry_policy: RetryPolicy, no_sleep: RecordingSleep
) -> None:
    operation = FlakyOperation(
        [
            EmbeddingServiceError("throttled", transient=True),
            EmbeddingServiceError("connection reset", transient=True),
        ]
    )

    result = await call_with_retry(
        operation, retry_policy, error_type=EmbeddingServiceError, sleep=no_sleep
    )

    assert result == "ok"
    assert operation.calls == 3
    assert no_sleep.delays == [0.5, 1.0]


@pytest.mark.asyncio
async def test_permanent_error_is_not_retried(
    retry_policy: RetryPolicy, no_sleep: RecordingSleep
) -> None:
    operation = FlakyOperation([GenerationServiceError("invalid api key")])

    with pytest.raises(GenerationServiceError) as exc_info:
        await call_with_retry(
            operation,
            retry_policy,
            error_type=GenerationServiceError,
            identifier="query-1",
            sleep=no_sleep,
        )

    assert operation.calls == 1
    assert no_sleep.delays == []
    assert exc_info.value.identifier == "query-1"
    assert str(exc_info.value) == "invalid api key [query-1]"


@pytest.mark.asyncio
async def test_exhausted_budget_raises_last_error(no_sleep: RecordingSleep) -> None:
    policy = RetryPolicy(max_attempts=4, initial_backoff=1.0, max_backoff=3.0, timeout=1.0)
    errors = [EmbeddingServiceError(f"failure {i}", transient=True) for i in range(4)]
    operation = FlakyOperation(errors)

    with pytest.raises(EmbeddingServiceError, match="failure 3") as exc_info:
        await call_with_retry(
            operation, policy, error_type=EmbeddingServiceError, identifier="e-1", sleep=no_sleep
        )

    assert operation.calls == 4
    assert no_sleep.delays == [1.0, 2.0, 3.0]
    assert exc_info.value.transient
    assert exc_info.value.identifier == "e-1"


@pytest.mark.asyncio
async def test_existing_identifier_is_kept(
    retry_policy: RetryPolicy, no_sleep: RecordingSleep
) -> None:
    operation = FlakyOperation([EmbeddingServiceError("bad request", "chunk-7")])

    with pytest.raises(EmbeddingServiceError) as exc_info:
        await call_with_retry(
            operation,
            retry_policy,
            error_type=EmbeddingServiceError,
            identifier="batch",
            sleep=no_sleep,
        )

    assert exc_info.value.identifier == "chunk-7"


@pytest.mark.asyncio
async def test_timeout_is_transient_and_retried(no_sleep: RecordingSleep) -> None:
    policy = RetryPolicy(max_attempts=2, initial_backoff=0.25, timeout=0.01)
    calls = 0

    async def hang() -> str:
        nonlocal calls
        calls += 1
        await asyncio.sleep(5)
        return "never"

    with pytest.raises(GenerationServiceError, match="timed out") as exc_info:
        await call_with_retry(
            hang, policy, error_type=GenerationServiceError, identifier="q", sleep=no_sleep
        )

    assert calls == 2
    assert no_sleep.delays == [0.25]
    assert exc_info.value.transient
    assert exc_info.value.identifier == "q"


@pytest.mark.asyncio
async def test_timeout_then_success(no_sleep: RecordingSleep) -> None:
    policy = RetryPolicy(max_attempts=3, timeout=0.01)
    attempts = 0

    async def slow_first() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            await asyncio.sleep(5)
        return "done"

    result = await call_with_retry(
        slow_first, policy, error_type=EmbeddingServiceError, sleep=no_sleep
    )

    assert result == "done"
    assert attempts == 2


@pytest.mark.asyncio
async def test_non_service_errors_propagate(
    retry_policy: RetryPolicy, no_sleep: RecordingSleep
) -> None:
    operation = FlakyOperation([KeyError("boom")])

    with pytest.raises(KeyError):
        await call_with_retry(
            operation, retry_policy, error_type=EmbeddingServiceError, sleep=no_sleep
        )

    assert operation.calls == 1


@pytest.mark.asyncio
async def test_single_attempt_raises_without_sleeping(no_sleep: RecordingSleep) -> None:
    policy = RetryPolicy(max_attempts=1, timeout=1.0)
    operation = FlakyOperation([EmbeddingServiceError("throttled", transient=True)])

    with pytest.raises(EmbeddingServiceError, match="throttled") as exc_info:
        await call_with_retry(
            operation, policy, error_type=EmbeddingServiceError, identifier="e-9", sleep=no_sleep
        )

    assert operation.calls == 1
    assert no_sleep.delays == []
    assert exc_info.value.identifier == "e-9"
