"""Search mode for retrieval."""

from enum import StrEnum


class SearchMode(StrEnum):
    """Plain top-k similarity or Maximum Marginal Relevance re-ranking."""

    SIMILARITY = "similarity"
    MMR = "mmr"
