from __future__ import annotations

from collections.abc import Sequence
from functools import partial
from typing import Any

from dewey.config import ClientConfig
from dewey.decoders import decode_index, decode_indexes_response
from dewey.models import Index, IndexesResponse, SummarizedTask
from dewey.operation import Operation, build_request, segment
from dewey.verify import parse_response, parse_summarized_task_response


def get_all_indexes(client: ClientConfig, *, offset: int = 0, limit: int = 20) -> Operation[IndexesResponse]:
    return Operation(
        request=build_request(client, "GET", "/indexes", params={"offset": offset, "limit": limit}),
        parse=partial(parse_response, decoder=decode_indexes_response),
    )


def get_index(client: ClientConfig, uid: str) -> Operation[Index]:
    return Operation(
        request=build_request(client, "GET", f"/indexes/{segment(uid)}"),
        parse=partial(parse_response, decoder=decode_index),
    )


def create_index(client: ClientConfig, uid: str, primary_key: str | None = None) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(client, "POST", "/indexes", body={"uid": uid, "primaryKey": primary_key}),
        parse=parse_summarized_task_response,
    )


def update_index(client: ClientConfig, uid: str, primary_key: str) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(client, "PATCH", f"/indexes/{segment(uid)}", body={"primaryKey": primary_key}),
        parse=parse_summarized_task_response,
    )


def delete_index(client: ClientConfig, uid: str) -> Operation[SummarizedTask]:
    return Operation(
        request=build_request(client, "DELETE", f"/indexes/{segment(uid)}"),
        parse=parse_summarized_task_response,
    )


def _swap_body(pairs: Sequence[tuple[str, str]], *, rename: bool) -> list[dict[str, Any]]:
    body: list[dict[str, Any]] = []
    for first, second in pairs:
        entry: dict[str, Any] = {"indexes": [first, second]}
        if rename:
            entry["rename"] = True
        body.append(entry)
    return body


def swap_indexes(client: ClientConfig, pairs: Sequence[tuple[str, str]]) -> Operation[SummarizedTask]:
    """
    Swap each pair of indexes. Pairs are sent in the given order.
    """
    return Operation(
        request=build_request(client, "POST", "/swap-indexes", body=_swap_body(pairs, rename=False)),
        parse=parse_summarized_task_response,
    )


def rename_indexes(client: ClientConfig, pairs: Sequence[tuple[str, str]]) -> Operation[SummarizedTask]:
    """
    Rename the first index of each pair to the second uid, through the swap endpoint.
    """
    return Operation(
        request=build_request(client, "POST", "/swap-indexes", body=_swap_body(pairs, rename=True)),
        parse=parse_summarized_task_response,
    )
