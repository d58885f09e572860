from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import BaseModel, Field

from dewey.decoders import (
    EPOCH,
    decode_index,
    decode_json,
    decode_summarized_task,
    decode_task,
    documents_response,
    field,
    integer,
    list_of,
    model_decoder,
    model_encoder,
    optional,
    optional_field,
    parse_rfc3339,
    string,
    task_status,
    task_type,
)
from dewey.errors import DecodeError, JSONDecodeError
from dewey.models import Index, TaskError, TaskStatus, TaskType
from dewey.result import Failure, Success


def test_index_with_malformed_updated_at_falls_back_to_epoch() -> None:
    index = decode_index(
        {
            "uid": "movies",
            "createdAt": "2024-01-01T00:00:00Z",
            "updatedAt": "not-a-date",
            "primaryKey": "id",
        }
    )
    assert index == Index(
        uid="movies",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=EPOCH,
        primary_key="id",
    )
    assert EPOCH.timestamp() == 0


def test_index_primary_key_may_be_null() -> None:
    index = decode_index({"uid": "movies", "createdAt": 3, "primaryKey": None})
    assert index.primary_key is None
    assert index.created_at == EPOCH
    assert index.updated_at == EPOCH


def test_index_requires_uid() -> None:
    with pytest.raises(DecodeError, match="Missing field 'uid'"):
        decode_index({"primaryKey": "id"})


def test_unknown_task_status_and_type_degrade() -> None:
    assert task_status("exploding") is TaskStatus.UNEXPECTED
    assert task_type("documentTeleportation") is TaskType.UNEXPECTED
    assert task_status("unexpected") is TaskStatus.UNEXPECTED
    with pytest.raises(DecodeError):
        task_status(3)


def test_summarized_task_malformed_enqueued_at_is_an_error(task_payload: dict) -> None:
    payload = dict(task_payload, enqueuedAt="yesterday")
    with pytest.raises(DecodeError) as exc:
        decode_summarized_task(payload)
    assert exc.value.path == ("enqueuedAt",)

    result = decode_json(json.dumps(payload), decode_summarized_task)
    assert isinstance(result, Failure)
    assert "enqueuedAt" in result.error.detail


def test_summarized_task_index_uid_absent_or_null(task_payload: dict) -> None:
    absent = {k: v for k, v in task_payload.items() if k != "indexUid"}
    assert decode_summarized_task(absent).index_uid is None
    assert decode_summarized_task(dict(task_payload, indexUid=None)).index_uid is None


def test_decode_full_task() -> None:
    task = decode_task(
        {
            "uid": 12,
            "batchUid": 3,
            "indexUid": None,
            "status": "failed",
            "type": "indexSwap",
            "canceledBy": None,
            "details": {"swaps": [{"indexes": ["a", "b"]}]},
            "error": {
                "message": "Index `a` not found.",
                "code": "index_not_found",
                "type": "invalid_request",
                "link": "https://docs.meilisearch.com/errors#index_not_found",
            },
            "duration": "PT0.001192S",
            "enqueuedAt": "2024-05-01T10:20:30Z",
            "startedAt": "2024-05-01T10:20:31+02:00",
            "finishedAt": None,
        }
    )
    assert task.uid == 12
    assert task.index_uid is None
    assert task.status is TaskStatus.FAILED
    assert task.type is TaskType.INDEX_SWAP
    assert task.details == {"swaps": [{"indexes": ["a", "b"]}]}
    assert task.error == TaskError(
        message="Index `a` not found.",
        code="index_not_found",
        error_type="invalid_request",
        link="https://docs.meilisearch.com/errors#index_not_found",
    )
    assert task.started_at.utcoffset() == timedelta(hours=2)
    assert task.finished_at is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-01T00:00:00Z", datetime(2024, 1, 1, tzinfo=timezone.utc)),
        ("2024-01-01T00:00:00.5Z", datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)),
        ("2019-11-20T09:40:33.711324123Z", datetime(2019, 11, 20, 9, 40, 33, 711324, tzinfo=timezone.utc)),
        ("2024-01-01T01:00:00+01:00", datetime(2024, 1, 1, tzinfo=timezone.utc)),
    ],
)
def test_parse_rfc3339(value: str, expected: datetime) -> None:
    assert parse_rfc3339(value) == expected


@pytest.mark.parametrize("value", ["2024-01-01", "2024-01-01T00:00:00", "2024-13-01T00:00:00Z", "not-a-date"])
def test_parse_rfc3339_rejects(value: str) -> None:
    with pytest.raises(DecodeError):
        parse_rfc3339(value)


def test_integer_rejects_booleans() -> None:
    assert integer(3) == 3
    with pytest.raises(DecodeError, match="Expected integer, got boolean"):
        integer(True)


def test_error_path_points_at_failing_item() -> None:
    decoder = list_of(lambda v: field(v, "name", string))
    with pytest.raises(DecodeError) as exc:
        decoder([{"name": "a"}, {"name": 2}])
    assert exc.value.path == (1, "name")
    assert str(exc.value) == "Expected string, got number at $[1].name"


def test_optional_field_default() -> None:
    assert optional_field({}, "x", integer, 5) == 5
    assert optional_field({"x": None}, "x", integer, 5) == 5
    with pytest.raises(DecodeError):
        optional_field({"x": "5"}, "x", integer, 5)


def test_documents_response_uses_caller_decoder() -> None:
    decoder = documents_response(lambda v: v["title"])
    page = decoder({"results": [{"title": "Alien"}, {"title": "Heat"}], "offset": 0, "limit": 2, "total": 9})
    assert page.results == ("Alien", "Heat")
    assert (page.offset, page.limit, page.total) == (0, 2, 9)


def test_decode_json_reports_invalid_json() -> None:
    result = decode_json(b"{", string)
    assert isinstance(result, Failure)
    assert isinstance(result.error, JSONDecodeError)
    assert result.error.detail.startswith("Invalid JSON")


def test_decode_json_deeply_nested_body_is_decode_error() -> None:
    result = decode_json("[" * 100_000 + "]" * 100_000, list_of(integer))
    assert isinstance(result, Failure)
    assert isinstance(result.error, JSONDecodeError)
    assert result.error.detail.startswith("Invalid JSON")


def test_optional_decoder() -> None:
    assert optional(integer)(None) is None
    assert optional(integer)(4) == 4
    with pytest.raises(DecodeError):
        optional(integer)("4")


def test_decode_json_catches_plain_python_decoder_errors() -> None:
    result = decode_json('{"a": 1}', lambda v: v["missing"])
    assert isinstance(result, Failure)


class Movie(BaseModel):
    id: int
    title: str
    release_year: int | None = Field(default=None, alias="releaseYear")


def test_model_decoder_and_encoder() -> None:
    decoder = model_decoder(Movie)
    movie = decoder({"id": 1, "title": "Alien", "releaseYear": 1979})
    assert movie == Movie(id=1, title="Alien", releaseYear=1979)
    assert model_encoder(Movie)(movie) == {"id": 1, "title": "Alien", "releaseYear": 1979}

    assert decode_json('{"id": "x"}', decoder) == Failure(
        JSONDecodeError("Invalid Movie: 2 validation error(s)")
    )
    assert isinstance(decode_json('{"id": 2, "title": "Heat"}', decoder), Success)
