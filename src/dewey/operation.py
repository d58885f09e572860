"""Sans-IO operations.

An `Operation` binds a fully built `httpx.Request` to the parser for its response.
Nothing here opens a connection; sending is the caller's job, either directly
(`client.send(op.request)` then `op.parse(response)`) or through `execute`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import quote

import httpx

from dewey.config import ClientConfig
from dewey.errors import CustomError, DeweyError
from dewey.result import Failure, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

Transport = Callable[[httpx.Request], httpx.Response]
AsyncTransport = Callable[[httpx.Request], Awaitable[httpx.Response]]

_MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
_NO_BODY: Any = object()


@dataclass(frozen=True)
class Operation(Generic[T]):
    request: httpx.Request
    parse: Callable[[httpx.Response], Result[T, DeweyError]]


def segment(value: str) -> str:
    return quote(value, safe="")


def build_request(
    client: ClientConfig,
    method: str,
    path: str,
    *,
    body: Any = _NO_BODY,
    params: dict[str, Any] | None = None,
) -> httpx.Request:
    method = method.upper()
    headers = {"Authorization": f"Bearer {client.api_key}"}
    if method in _MUTATING_METHODS:
        headers["Content-Type"] = "application/json"
    content = None if body is _NO_BODY else json.dumps(body).encode("utf-8")
    return httpx.Request(
        method,
        f"{client.base_url}{path}",
        headers=headers,
        params=params,
        content=content,
    )


def execute(
    operation: Operation[T],
    send: Transport,
    *,
    transport_errors: tuple[type[BaseException], ...] = (httpx.TransportError,),
) -> Result[T, DeweyError]:
    """
    Send `operation.request` through `send` and parse the response.

    Exceptions listed in `transport_errors` come back as `CustomError`; anything else propagates.
    """
    request = operation.request
    logger.debug("Sending %s %s", request.method, request.url)
    try:
        response = send(request)
    except transport_errors as e:
        logger.debug("Transport failed for %s %s: %r", request.method, request.url, e)
        return Failure(CustomError(e))
    return operation.parse(response)


async def execute_async(
    operation: Operation[T],
    send: AsyncTransport,
    *,
    transport_errors: tuple[type[BaseException], ...] = (httpx.TransportError,),
) -> Result[T, DeweyError]:
    request = operation.request
    logger.debug("Sending %s %s", request.method, request.url)
    try:
        response = await send(request)
    except transport_errors as e:
        logger.debug("Transport failed for %s %s: %r", request.method, request.url, e)
        return Failure(CustomError(e))
    return operation.parse(response)
