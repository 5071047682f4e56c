"""Domain value objects."""

from ragpipe.domain.value_objects.chunking_strategy import ChunkingStrategy
from ragpipe.domain.value_objects.entry_id import EntryId
from ragpipe.domain.value_objects.search_mode import SearchMode

__all__ = [
    "ChunkingStrategy",
    "EntryId",
    "SearchMode",
]
