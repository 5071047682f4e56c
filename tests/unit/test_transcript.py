"""Unit tests for ConversationTranscript."""

import pytest

from ragpipe.domain.entities import ConversationTranscript, Turn
from ragpipe.domain.exceptions import InvalidConfigError


def test_render_formats_turns_in_order() -> None:
    transcript = ConversationTranscript(max_chars=200)
    transcript.add("user", "What is RAG?")
    transcript.add("assistant", "Retrieval augmented generation.")

    assert transcript.render() == "user: What is RAG?\nassistant: Retrieval augmented generation."
    assert len(transcript) == 2


def test_oldest_turns_evicted_first() -> None:
    transcript = ConversationTranscript(max_chars=45)
    transcript.add("user", "first question")
    transcript.add("assistant", "first answer")
    transcript.add("user", "second question")

    assert transcript.turns == [
        Turn("assistant", "first answer"),
        Turn("user", "second question"),
    ]
    assert len(transcript.render()) <= 45


def test_render_never_exceeds_limit() -> None:
    transcript = ConversationTranscript(max_chars=50)
    for i in range(20):
        transcript.add("user" if i % 2 == 0 else "assistant", f"message number {i}")
        assert len(transcript.render()) <= 50
    assert transcript.turns[-1].text == "message number 19"


def test_oversized_turn_keeps_its_tail() -> None:
    transcript = ConversationTranscript(max_chars=20)
    transcript.add("user", "hello")
    transcript.add("assistant", "0123456789abcdefghijXYZ")

    assert len(transcript) == 1
    rendered = transcript.render()
    assert len(rendered) == 20
    assert rendered.startswith("assistant: ")
    assert rendered.endswith("XYZ")


def test_clear_empties_transcript() -> None:
    transcript = ConversationTranscript(max_chars=100)
    transcript.add("user", "hi")
    transcript.clear()

    assert len(transcript) == 0
    assert transcript.render() == ""


@pytest.mark.parametrize("max_chars", [0, -10])
def test_non_positive_limit_raises(max_chars: int) -> None:
    with pytest.raises(InvalidConfigError):
        ConversationTranscript(max_chars=max_chars)
