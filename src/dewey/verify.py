from __future__ import annotations

import json
import logging
from typing import TypeVar

import httpx

from dewey.decoders import Decoder, decode_json, decode_summarized_task, decode_task_error
from dewey.errors import APIError, DecodeError, DeweyError, UnexpectedAPIError
from dewey.models import SummarizedTask
from dewey.result import Failure, Result, Success

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCESS_STATUS_CODES = frozenset({200, 201, 202, 204, 205})


def _api_error(body: str) -> DeweyError:
    try:
        err = decode_task_error(json.loads(body))
    except (ValueError, RecursionError, DecodeError):
        return UnexpectedAPIError()
    return APIError(message=err.message, code=err.code, error_type=err.error_type, link=err.link)


def verify_response(response: httpx.Response) -> Result[str, DeweyError]:
    """
    Pass the raw body through for allow-listed status codes; otherwise read it as an API error.

    The body of a successful response is not inspected here.
    """
    if response.status_code in SUCCESS_STATUS_CODES:
        return Success(response.text)
    error = _api_error(response.text)
    logger.debug("API call failed with status %s: %r", response.status_code, error)
    return Failure(error)


def parse_response(response: httpx.Response, decoder: Decoder[T]) -> Result[T, DeweyError]:
    verified = verify_response(response)
    if isinstance(verified, Failure):
        return verified
    return decode_json(verified.value, decoder)


def parse_summarized_task_response(response: httpx.Response) -> Result[SummarizedTask, DeweyError]:
    return parse_response(response, decode_summarized_task)


def parse_empty_response(response: httpx.Response) -> Result[None, DeweyError]:
    verified = verify_response(response)
    if isinstance(verified, Failure):
        return verified
    return Success(None)
