"""Retrieval configuration DTO."""

from dataclasses import dataclass

from ragpipe.domain.exceptions import InvalidConfigError
from ragpipe.domain.value_objects import SearchMode


@dataclass(frozen=True)
class RetrievalConfig:
    """How many entries to return and how to rank them."""

    k: int = 4
    fetch_k: int = 20
    lambda_mult: float = 0.5
    mode: SearchMode = SearchMode.SIMILARITY

    def __post_init__(self) -> None:
        if self.k < 1:
            raise InvalidConfigError(f"k must be positive, got {self.k}")
        if self.fetch_k < self.k:
            raise InvalidConfigError(f"fetch_k ({self.fetch_k}) must be >= k ({self.k})")
        if not 0.0 <= self.lambda_mult <= 1.0:
            raise InvalidConfigError(f"lambda_mult must be in [0, 1], got {self.lambda_mult}")
