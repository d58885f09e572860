from __future__ import annotations

import logging

from dewey.config import ClientConfig, Settings, client_from_settings, load_settings, new_client
from dewey.decoders import Decoder, Encoder, decode_json, model_decoder, model_encoder
from dewey.documents import (
    GetDocumentsOptions,
    add_or_replace_documents,
    add_or_update_documents,
    default_get_documents_options,
    delete_all_documents,
    delete_documents_by_batch,
    delete_documents_by_filter,
    delete_one_document,
    get_documents,
    get_one_document,
)
from dewey.errors import (
    APIError,
    ConfigError,
    CustomError,
    DecodeError,
    DeweyError,
    JSONDecodeError,
    UnexpectedAPIError,
)
from dewey.indexes import (
    create_index,
    delete_index,
    get_all_indexes,
    get_index,
    rename_indexes,
    swap_indexes,
    update_index,
)
from dewey.models import (
    DocumentID,
    DocumentsResponse,
    Index,
    IndexesResponse,
    IntID,
    StringID,
    SummarizedTask,
    Task,
    TaskError,
    TaskStatus,
    TaskType,
)
from dewey.operation import Operation, execute, execute_async
from dewey.result import Failure, Result, Success, unwrap
from dewey.tasks import get_task
from dewey.verify import parse_summarized_task_response, verify_response

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "APIError",
    "ClientConfig",
    "ConfigError",
    "CustomError",
    "DecodeError",
    "Decoder",
    "DeweyError",
    "DocumentID",
    "DocumentsResponse",
    "Encoder",
    "Failure",
    "GetDocumentsOptions",
    "Index",
    "IndexesResponse",
    "IntID",
    "JSONDecodeError",
    "Operation",
    "Result",
    "Settings",
    "StringID",
    "Success",
    "SummarizedTask",
    "Task",
    "TaskError",
    "TaskStatus",
    "TaskType",
    "UnexpectedAPIError",
    "add_or_replace_documents",
    "add_or_update_documents",
    "client_from_settings",
    "create_index",
    "decode_json",
    "default_get_documents_options",
    "delete_all_documents",
    "delete_documents_by_batch",
    "delete_documents_by_filter",
    "delete_index",
    "delete_one_document",
    "execute",
    "execute_async",
    "get_all_indexes",
    "get_documents",
    "get_index",
    "get_one_document",
    "get_task",
    "load_settings",
    "model_decoder",
    "model_encoder",
    "new_client",
    "parse_summarized_task_response",
    "rename_indexes",
    "swap_indexes",
    "unwrap",
    "update_index",
    "verify_response",
]

__version__ = "0.1.0"
