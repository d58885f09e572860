from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any

from dewey.config import ClientConfig
from dewey.decoders import Decoder, Encoder, documents_response
from dewey.models import D, DocumentID, DocumentsResponse, SummarizedTask, document_id_path, document_id_value
from dewey.operation import Operation, build_request, segment
from dewey.verify import parse_response, parse_summarized_task_response


def _names(value: str | Sequence[str] | None) -> list[str] | None:
    if value is None:
        return None
    # A bare string is one name, not a sequence of characters.
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass(frozen=True)
class GetDocumentsOptions:
    offset: int = 0
    limit: int = 20
    fields: str | tuple[str, ...] | None = None
    filter: Any = None
    retrieve_vectors: bool = False
    sort: str | tuple[str, ...] | None = None
    ids: tuple[DocumentID, ...] | None = None

    def to_json(self) -> dict[str, Any]:
        """Every key is always present; unset options are sent as `null`."""
        return {
            "offset": self.offset,
            "limit": self.limit,
            "fields": _names(self.fields),
            "filter": self.filter,
            "retrieveVectors": self.retrieve_vectors,
            "sort": _names(self.sort),
            "ids": [document_id_value(i) for i in self.ids] if self.ids is not None else None,
        }


def default_get_documents_options() -> GetDocumentsOptions:
    return GetDocumentsOptions()


def _documents_path(index_uid: str) -> str:
    return f"/indexes/{segment(index_uid)}/documents"


def get_documents(
    client: ClientConfig,
    index_uid: str,
    decoder: Decoder[D],
    options: GetDocumentsOptions | None = None,
) -> Operation[DocumentsResponse[D]]:
    """
    Fetch a page of documents.

    Uses `POST .../documents/fetch` so filter, sort and field selection travel in the body.
    """
    options = options or default_get_documents_options()
    return Operation(
        request=build_request(client, "POST", f"{_documents_path(index_uid)}/fetch", body=options.to_json()),
        parse=partial(parse_response, decoder=documents_response(decoder)),
    )


def get_one_document(
    client: ClientConfig,
    index_uid: str,
    document_id: DocumentID,
    decoder: Decoder[D],
    *,
    fields: str | Sequence[str] | None = None,
) -> Operation[D]:
    names = _names(fields)
    params = {"fields": ",".join(names)} if names else None
    return Operation(
        request=build_request(
            client,
            "GET",
            f"{_documents_path(index_uid)}/{document_id_path(document_id)}",
            params=params,
        ),
        parse=partial(parse_response, decoder=decoder),
    )


def _write_documents(
    client: ClientConfig,
    method: str,
    index_uid: str,
    documents: Sequence[D],
    encoder: Encoder[D],
    primary_key: str | None,
) -> Operation[SummarizedTask]:
    params = {"primaryKey": primary_key} if primary_key is not None else None
    return Operation(
        request=build_request(
            client,
            method,
            _documents_path(index_uid),
            body=[encoder(doc) for doc in documents],
            params=params,
        ),
        parse=parse_summarized_task_response,
    )


def add_or_replace_documents(
    client: ClientConfig,
    index_uid: str,
    documents: Sequence[D],
    encoder: Encoder[D],
    *,
    primary_key: str | None = None,
) -> Operation[SummarizedTask]:
    return _write_documents(client, "POST", index_uid, documents, encoder, primary_key)


def add_or_update_documents(
    client: ClientConfig,
    index_uid: str,
    documents: Sequence[D],
    encoder: Encoder[D],
    *,
    primary_key: str | None = None,
) -> Operation[SummarizedTask]:
    """
    Like `add_or_replace_documents`, but fields missing from a document keep their stored value.
    """
    return _write_documents(client, "PUT", index_uid, documents, encoder, primary_key)


def delete_all_documents(client: ClientConfig, index_uid: str) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(client, "DELETE", _documents_path(index_uid)),
        parse=parse_summarized_task_response,
    )


def delete_one_document(client: ClientConfig, index_uid: str, document_id: DocumentID) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(client, "DELETE", f"{_documents_path(index_uid)}/{document_id_path(document_id)}"),
        parse=parse_summarized_task_response,
    )


def delete_documents_by_filter(client: ClientConfig, index_uid: str, filter: Any) -> Operation[SummarizedTask]:  # noqa: A002
    return Operation(
        request=build_request(client, "POST", f"{_documents_path(index_uid)}/delete", body={"filter": filter}),
        parse=parse_summarized_task_response,
    )


def delete_documents_by_batch(
    client: ClientConfig,
    index_uid: str,
    document_ids: Sequence[DocumentID],
) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(
            client,
            "POST",
            f"{_documents_path(index_uid)}/delete-batch",
            body=[document_id_value(i) for i in document_ids],
        ),
        parse=parse_summarized_task_response,
    )
