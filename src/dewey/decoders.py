from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from dewey.errors import DecodeError, JSONDecodeError
from dewey.models import (
    D,
    DocumentsResponse,
    Index,
    SummarizedTask,
    Task,
    TaskError,
    TaskStatus,
    TaskType,
)
from dewey.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Decoder = Callable[[Any], T]
Encoder = Callable[[T], Any]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def string(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError(f"Expected string, got {_kind(value)}")
    return value


def integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Expected integer, got {_kind(value)}")
    return value


def json_object(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected object, got {_kind(value)}")
    return value


def mapping(value: Any) -> Mapping[str, Any]:
    return MappingProxyType(dict(json_object(value)))


def optional(decoder: Decoder[T]) -> Decoder[T | None]:
    def decode(value: Any) -> T | None:
        if value is None:
            return None
        return decoder(value)

    return decode


def list_of(decoder: Decoder[T]) -> Decoder[tuple[T, ...]]:
    def decode(value: Any) -> tuple[T, ...]:
        if not isinstance(value, list):
            raise DecodeError(f"Expected array, got {_kind(value)}")
        items: list[T] = []
        for i, item in enumerate(value):
            try:
                items.append(decoder(item))
            except DecodeError as e:
                raise e.at(i) from None
        return tuple(items)

    return decode


def field(obj: Mapping[str, Any], name: str, decoder: Decoder[T]) -> T:
    if name not in obj:
        raise DecodeError(f"Missing field {name!r}")
    try:
        return decoder(obj[name])
    except DecodeError as e:
        raise e.at(name) from None


def optional_field(obj: Mapping[str, Any], name: str, decoder: Decoder[T], default: Any = None) -> Any:
    """
    Absent and `null` both yield `default`; any other value must satisfy `decoder`.
    """
    if obj.get(name) is None:
        return default
    return field(obj, name, decoder)


def parse_rfc3339(value: str) -> datetime:
    m = _RFC3339_RE.match(value.strip())
    if not m:
        raise DecodeError(f"Invalid RFC 3339 timestamp {value!r}")
    # datetime carries microseconds; the server emits up to nanoseconds.
    frac = m.group("frac")
    frac_part = f".{frac[:6].ljust(6, '0')}" if frac else ""
    offset = m.group("offset")
    if offset in {"Z", "z"}:
        offset = "+00:00"
    try:
        return datetime.fromisoformat(f"{m.group('date')}T{m.group('time')}{frac_part}{offset}")
    except ValueError as e:
        raise DecodeError(f"Invalid RFC 3339 timestamp {value!r}: {e}") from None


def timestamp(value: Any) -> datetime:
    return parse_rfc3339(string(value))


def lenient_timestamp(value: Any) -> datetime:
    """
    Like `timestamp`, but anything unparseable becomes the Unix epoch.
    """
    try:
        return timestamp(value)
    except DecodeError as e:
        logger.debug("Falling back to epoch for timestamp: %s", e)
        return EPOCH


def task_status(value: Any) -> TaskStatus:
    return TaskStatus.from_string(string(value))


def task_type(value: Any) -> TaskType:
    return TaskType.from_string(string(value))


def decode_index(value: Any) -> Index:
    obj = json_object(value)
    return Index(
        uid=field(obj, "uid", string),
        created_at=optional_field(obj, "createdAt", lenient_timestamp, EPOCH),
        updated_at=optional_field(obj, "updatedAt", lenient_timestamp, EPOCH),
        primary_key=optional_field(obj, "primaryKey", string),
    )


def decode_task_error(value: Any) -> TaskError:
    obj = json_object(value)
    return TaskError(
        message=field(obj, "message", string),
        code=field(obj, "code", string),
        error_type=field(obj, "type", string),
        link=field(obj, "link", string),
    )


def decode_summarized_task(value: Any) -> SummarizedTask:
    obj = json_object(value)
    return SummarizedTask(
        task_uid=field(obj, "taskUid", integer),
        index_uid=optional_field(obj, "indexUid", string),
        status=field(obj, "status", task_status),
        type=field(obj, "type", task_type),
        enqueued_at=field(obj, "enqueuedAt", timestamp),
    )


def decode_task(value: Any) -> Task:
    obj = json_object(value)
    return Task(
        uid=field(obj, "uid", integer),
        index_uid=optional_field(obj, "indexUid", string),
        status=field(obj, "status", task_status),
        type=field(obj, "type", task_type),
        canceled_by=optional_field(obj, "canceledBy", integer),
        details=optional_field(obj, "details", mapping),
        error=optional_field(obj, "error", decode_task_error),
        duration=optional_field(obj, "duration", string),
        enqueued_at=field(obj, "enqueuedAt", timestamp),
        started_at=optional_field(obj, "startedAt", timestamp),
        finished_at=optional_field(obj, "finishedAt", timestamp),
    )


def documents_response(item_decoder: Decoder[D]) -> Decoder[DocumentsResponse[D]]:
    """
    Page decoder; only the pagination envelope is inspected, items go to `item_decoder`.
    """

    def decode(value: Any) -> DocumentsResponse[D]:
        obj = json_object(value)
        return DocumentsResponse(
            results=field(obj, "results", list_of(item_decoder)),
            offset=field(obj, "offset", integer),
            limit=field(obj, "limit", integer),
            total=field(obj, "total", integer),
        )

    return decode


decode_indexes_response = documents_response(decode_index)


def decode_json(body: str | bytes, decoder: Decoder[T]) -> Result[T, JSONDecodeError]:
    try:
        value = json.loads(body)
    except (ValueError, RecursionError) as e:
        return Failure(JSONDecodeError(f"Invalid JSON: {e}"))
    try:
        return Success(decoder(value))
    # Caller-supplied document decoders are allowed to fail the plain-Python way.
    except (KeyError, TypeError, ValueError) as e:
        return Failure(JSONDecodeError(str(e)))


def model_decoder(model: type[M]) -> Decoder[M]:
    def decode(value: Any) -> M:
        try:
            return model.model_validate(value)
        except ValidationError as e:
            raise DecodeError(f"Invalid {model.__name__}: {e.error_count()} validation error(s)") from e

    return decode


def model_encoder(model: type[M]) -> Encoder[M]:
    def encode(document: M) -> Any:
        if not isinstance(document, model):
            raise TypeError(f"Expected {model.__name__}, got {type(document).__name__}")
        return document.model_dump(mode="json", by_alias=True)

    return encode
