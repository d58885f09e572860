from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar, Union
from urllib.parse import quote

D = TypeVar("D")


class TaskStatus(Enum):
    ENQUEUED = "enqueued"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"
    UNEXPECTED = "unexpected"

    @classmethod
    def from_string(cls, value: str) -> TaskStatus:
        """
        Total mapping: statuses this client does not know about become `UNEXPECTED`.
        """
        return _TASK_STATUSES.get(value, cls.UNEXPECTED)

    def to_string(self) -> str:
        return self.value


class TaskType(Enum):
    INDEX_CREATION = "indexCreation"
    INDEX_UPDATE = "indexUpdate"
    INDEX_DELETION = "indexDeletion"
    INDEX_SWAP = "indexSwap"
    DOCUMENT_ADDITION_OR_UPDATE = "documentAdditionOrUpdate"
    DOCUMENT_DELETION = "documentDeletion"
    DOCUMENT_EDITION = "documentEdition"
    SETTINGS_UPDATE = "settingsUpdate"
    DUMP_CREATION = "dumpCreation"
    TASK_CANCELATION = "taskCancelation"
    TASK_DELETION = "taskDeletion"
    SNAPSHOT_CREATION = "snapshotCreation"
    UPGRADE_DATABASE = "upgradeDatabase"
    UNEXPECTED = "unexpected"

    @classmethod
    def from_string(cls, value: str) -> TaskType:
        return _TASK_TYPES.get(value, cls.UNEXPECTED)

    def to_string(self) -> str:
        return self.value


# "unexpected" is not a wire value; it must not round-trip back into a known member.
_TASK_STATUSES = {s.value: s for s in TaskStatus if s is not TaskStatus.UNEXPECTED}
_TASK_TYPES = {t.value: t for t in TaskType if t is not TaskType.UNEXPECTED}


@dataclass(frozen=True)
class Index:
    uid: str
    created_at: datetime
    updated_at: datetime
    primary_key: str | None


@dataclass(frozen=True)
class TaskError:
    message: str
    code: str
    error_type: str
    link: str


@dataclass(frozen=True)
class SummarizedTask:
    task_uid: int
    index_uid: str | None
    status: TaskStatus
    type: TaskType
    enqueued_at: datetime


@dataclass(frozen=True)
class Task:
    uid: int
    index_uid: str | None
    status: TaskStatus
    type: TaskType
    canceled_by: int | None
    details: Mapping[str, Any] | None
    error: TaskError | None
    duration: str | None
    enqueued_at: datetime
    started_at: datetime | None
    finished_at: datetime | None


@dataclass(frozen=True)
class StringID:
    value: str


@dataclass(frozen=True)
class IntID:
    value: int


DocumentID = Union[StringID, IntID]


def document_id_value(document_id: DocumentID) -> str | int:
    """JSON body form: integers stay integers."""
    if isinstance(document_id, IntID):
        return document_id.value
    if isinstance(document_id, StringID):
        return document_id.value
    raise TypeError(f"Unsupported document id: {document_id!r}")


def document_id_path(document_id: DocumentID) -> str:
    """
    URL path segment for a document id.

    Both read and delete endpoints go through here so `IntID(42)` and `StringID("42")`
    always address the same resource.
    """
    return quote(str(document_id_value(document_id)), safe="")


@dataclass(frozen=True)
class DocumentsResponse(Generic[D]):
    results: tuple[D, ...]
    offset: int
    limit: int
    total: int


IndexesResponse = DocumentsResponse[Index]
