"""Timeout and retry handling for external service calls."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from ragpipe.application.dto.retry_policy import RetryPolicy
from ragpipe.domain.exceptions import ExternalServiceError

logger = structlog.get_logger()

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    *,
    error_type: type[ExternalServiceError],
    identifier: str | None = None,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Run ``operation`` under the policy's timeout and attempt budget.

    Transient ExternalServiceErrors and timeouts are retried with exponential
    backoff; permanent errors propagate on the first occurrence. When the budget
    is spent the last error is raised. Errors are stamped with ``identifier``.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return await asyncio.wait_for(operation(), timeout=policy.timeout)
        except TimeoutError as e:
            error = error_type(
                f"Call timed out after {policy.timeout}s", identifier, transient=True
            )
            error.__cause__ = e
        except ExternalServiceError as e:
            if e.identifier is None:
                e.identifier = identifier
            if not e.transient:
                logger.warning(
                    "external_call_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    identifier=identifier,
                    attempt=attempt,
                )
                raise
            error = e

        if attempt >= policy.max_attempts:
            logger.error(
                "external_call_retries_exhausted",
                error=str(error),
                error_type=type(error).__name__,
                identifier=identifier,
                attempts=attempt,
            )
            raise error

        delay = policy.backoff(attempt - 1)
        logger.warning(
            "external_call_retry_scheduled",
            error=str(error),
            identifier=identifier,
            attempt=attempt,
            max_attempts=policy.max_attempts,
            delay=delay,
        )
        await sleep(delay)
