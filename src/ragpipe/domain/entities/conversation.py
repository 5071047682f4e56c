"""Conversation transcript with bounded size."""

from collections import deque
from dataclasses import dataclass
from typing import Literal

from ragpipe.domain.exceptions import InvalidConfigError

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class Turn:
    """One message of a conversation."""

    role: Role
    text: str

    def render(self) -> str:
        return f"{self.role}: {self.text}"


class ConversationTranscript:
    """Rolling transcript; oldest turns are evicted first once it grows past max_chars."""

    def __init__(self, max_chars: int) -> None:
        if max_chars < 1:
            raise InvalidConfigError(f"Transcript max_chars must be positive, got {max_chars}")
        self.max_chars = max_chars
        self._turns: deque[Turn] = deque()

    @property
    def turns(self) -> list[Turn]:
        return list(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def add(self, role: Role, text: str) -> None:
        """Append a turn and evict from the front until the transcript fits."""
        turn = Turn(role=role, text=text)
        overflow = len(turn.render()) - self.max_chars
        if overflow > 0:
            # Keep the tail of an oversized turn.
            turn = Turn(role=role, text=text[overflow:])
        self._turns.append(turn)
        while len(self.render()) > self.max_chars:
            self._turns.popleft()

    def render(self) -> str:
        return "\n".join(t.render() for t in self._turns)

    def clear(self) -> None:
        self._turns.clear()
