"""Domain exceptions."""


class RagPipeError(Exception):
    """Base exception for ragpipe.

    ``identifier`` names the offending input (file path, entry id or query id).
    """

    def __init__(self, message: str, identifier: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def __str__(self) -> str:
        if self.identifier:
            return f"{self.message} [{self.identifier}]"
        return self.message


class NotFoundError(RagPipeError):
    """Requested path or resource was not found."""

    pass


class UnsupportedFormatError(RagPipeError):
    """Document type is not recognized or cannot be read."""

    pass


class DocumentParseError(UnsupportedFormatError):
    """Document has a known type but parsing it failed."""

    pass


class InvalidConfigError(RagPipeError):
    """Chunking, retrieval or retry parameters are invalid."""

    pass


class ValidationError(RagPipeError):
    """Validation failed for input data."""

    pass


class ExternalServiceError(RagPipeError):
    """An external collaborator failed.

    Transient failures (timeouts, transport errors, throttling) may be retried;
    permanent ones (authentication, quota exhaustion) must not be.
    """

    def __init__(
        self,
        message: str,
        identifier: str | None = None,
        *,
        transient: bool = False,
    ) -> None:
        super().__init__(message, identifier)
        self.transient = transient


class EmbeddingServiceError(ExternalServiceError):
    """Embedding service call failed."""

    pass


class GenerationServiceError(ExternalServiceError):
    """Generation service call failed."""

    pass
