"""Unit tests for domain entities, value objects and report DTOs."""

import pytest

from ragpipe.application.dto.reports import Answer, LoadFailure, LoadReport
from ragpipe.domain.entities import Document, QueryResult, ScoredEntry
from ragpipe.domain.exceptions import NotFoundError, ValidationError
from ragpipe.domain.value_objects import EntryId

from tests.conftest import make_entry


def test_entry_id_is_deterministic() -> None:
    assert EntryId.for_chunk("a.txt", 3) == EntryId.for_chunk("a.txt", 3)
    assert EntryId.for_chunk("a.txt", 3) != EntryId.for_chunk("a.txt", 4)
    assert EntryId.for_chunk("a.txt", 0) != EntryId.for_chunk("b.txt", 0)


def test_entry_id_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        EntryId.for_chunk("a.txt", -1)


def test_document_requires_text() -> None:
    with pytest.raises(ValidationError) as exc_info:
        Document(source="empty.txt", text="")
    assert exc_info.value.identifier == "empty.txt"


def test_query_result_helpers() -> None:
    result = QueryResult(
        query_id="q1",
        query="what?",
        entries=[
            ScoredEntry(make_entry("1", (1.0,), text="one", source="a.md"), 0.9),
            ScoredEntry(make_entry("2", (1.0,), text="two", source="b.md"), 0.8),
            ScoredEntry(make_entry("3", (1.0,), text="three", source="a.md"), 0.7),
        ],
    )

    assert len(result) == 3
    assert not result.is_empty
    assert result.texts() == ["one", "two", "three"]
    assert result.sources() == ["a.md", "b.md"]
    assert QueryResult(query_id="q2", query="x").is_empty


def test_load_report_summary() -> None:
    report = LoadReport(
        documents=[Document(source="a.txt", text="a")],
        failures=[LoadFailure(source="b.txt", error=NotFoundError("gone", "b.txt"))],
    )

    assert not report.ok
    assert report.summary() == (
        "loaded 1 document(s), 1 failure(s): b.txt: NotFoundError: gone"
    )
    assert LoadReport().ok


def test_answer_exposes_result_fields() -> None:
    result = QueryResult(
        query_id="q1",
        query="q",
        entries=[ScoredEntry(make_entry("1", (1.0,), source="a.md"), 1.0)],
    )
    answer = Answer(text="yes", answered=True, result=result)
    assert answer.query_id == "q1"
    assert answer.sources == ["a.md"]
