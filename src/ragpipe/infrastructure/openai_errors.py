"""Classification of OpenAI client errors into transient and permanent."""

import openai

# Request timeout, conflict, throttling; 5xx is handled separately.
_TRANSIENT_STATUS = frozenset({408, 409, 429})


def is_transient(error: openai.APIError) -> bool:
    """True when retrying the same request may succeed."""
    if isinstance(error, openai.APIConnectionError):
        return True
    if isinstance(error, openai.RateLimitError):
        # Quota exhaustion is reported as 429 too, but will not clear on retry.
        return error.code != "insufficient_quota"
    if isinstance(error, openai.APIStatusError):
        return error.status_code in _TRANSIENT_STATUS or error.status_code >= 500
    return False
