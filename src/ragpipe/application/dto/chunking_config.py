"""Chunking configuration DTO."""

from dataclasses import dataclass, field

from ragpipe.domain.exceptions import InvalidConfigError
from ragpipe.domain.value_objects import ChunkingStrategy

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n\n", "\n", " ", "")


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for text chunking. Sizes are in characters."""

    chunk_size: int
    chunk_overlap: int
    strategy: ChunkingStrategy = ChunkingStrategy.RECURSIVE
    separators: tuple[str, ...] = field(default=DEFAULT_SEPARATORS)

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise InvalidConfigError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise InvalidConfigError(f"chunk_overlap must not be negative, got {self.chunk_overlap}")
        if self.chunk_overlap >= self.chunk_size:
            raise InvalidConfigError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        if not self.separators:
            raise InvalidConfigError("separators must not be empty")
        # Accept lists from callers but keep the frozen instance hashable.
        object.__setattr__(self, "separators", tuple(self.separators))

    @property
    def effective_separators(self) -> tuple[str, ...]:
        """Separator list used by the strategy, always ending in the empty separator."""
        if self.strategy == ChunkingStrategy.FIXED:
            return ("",)
        if self.separators[-1] != "":
            return (*self.separators, "")
        return self.separators
