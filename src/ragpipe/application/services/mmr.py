"""Maximum Marginal Relevance selection over a scored candidate pool."""

import math
from collections.abc import Sequence

from ragpipe.domain.entities import EmbeddingVector, ScoredEntry
from ragpipe.domain.exceptions import InvalidConfigError, ValidationError


def cosine_similarity(a: EmbeddingVector, b: EmbeddingVector) -> float:
    """Cosine similarity of two vectors; 0.0 if either is a zero vector."""
    if len(a) != len(b):
        raise ValidationError(f"Vector dimension mismatch: {len(a)} != {len(b)}")
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return dot / (norm_a * norm_b)


def mmr_select(
    candidates: Sequence[ScoredEntry],
    k: int,
    lambda_mult: float,
) -> list[ScoredEntry]:
    """Greedily pick up to k candidates balancing relevance against redundancy.

    ``candidates`` must be ordered by descending relevance; each candidate's
    ``score`` is its similarity to the query. At every step the remaining
    candidate maximizing

        lambda_mult * score - (1 - lambda_mult) * max(sim(c, s) for s in selected)

    is taken; ties go to the earlier candidate. lambda_mult=1 keeps the input
    order, lambda_mult=0 optimizes for diversity only.
    """
    if k < 1:
        raise InvalidConfigError(f"k must be positive, got {k}")
    if not 0.0 <= lambda_mult <= 1.0:
        raise InvalidConfigError(f"lambda_mult must be in [0, 1], got {lambda_mult}")

    remaining = list(range(len(candidates)))
    # Highest similarity of each candidate to anything selected so far.
    redundancy = [-math.inf] * len(candidates)
    selected: list[int] = []

    while remaining and len(selected) < k:
        best_idx = remaining[0]
        best_value = -math.inf
        for idx in remaining:
            penalty = redundancy[idx] if selected else 0.0
            value = lambda_mult * candidates[idx].score - (1.0 - lambda_mult) * penalty
            if value > best_value:
                best_value = value
                best_idx = idx
        selected.append(best_idx)
        remaining.remove(best_idx)

        chosen = candidates[best_idx].entry.vector
        for idx in remaining:
            sim = cosine_similarity(candidates[idx].entry.vector, chosen)
            if sim > redundancy[idx]:
                redundancy[idx] = sim

    return [candidates[i] for i in selected]
