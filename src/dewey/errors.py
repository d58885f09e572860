"""Error taxonomy returned inside `Failure` values.

Every variant is an `Exception` so a caller can `raise` it (see `result.unwrap`),
but the library itself only ever returns them.
"""

from __future__ import annotations

from dataclasses import dataclass


class DeweyError(Exception):
    """Base class for errors carried by operation results."""


@dataclass(frozen=True)
class JSONDecodeError(DeweyError):
    """A success body was not JSON, or not the JSON shape the decoder expects."""

    detail: str

    def __str__(self) -> str:
        return f"Unable to decode response body: {self.detail}"


@dataclass(frozen=True)
class APIError(DeweyError):
    """The server rejected the request with a well-formed error body."""

    message: str
    code: str
    error_type: str
    link: str

    def __str__(self) -> str:
        return f"{self.code} ({self.error_type}): {self.message}"


@dataclass(frozen=True)
class UnexpectedAPIError(DeweyError):
    """The server rejected the request and its error body could not be read."""

    def __str__(self) -> str:
        return "Unexpected API error response"


@dataclass(frozen=True)
class CustomError(DeweyError):
    """Wraps an error raised by the caller's transport."""

    error: BaseException

    def __str__(self) -> str:
        return f"Transport error: {self.error!r}"


class DecodeError(ValueError):
    def __init__(self, message: str, path: tuple[str | int, ...] = ()):
        super().__init__(message)
        self.message = message
        self.path = path

    def at(self, key: str | int) -> DecodeError:
        return DecodeError(self.message, (key, *self.path))

    def __str__(self) -> str:
        if not self.path:
            return self.message
        location = "".join(f"[{p}]" if isinstance(p, int) else f".{p}" for p in self.path)
        return f"{self.message} at ${location}"


@dataclass(frozen=True)
class ConfigError(ValueError):
    message: str
    url: str

    def __str__(self) -> str:
        return f"{self.message}: {self.url!r}"
