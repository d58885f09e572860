from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    error: E


Result = Union[Success[T], Failure[E]]


def unwrap(result: Result[T, E]) -> T:
    """
    Return the success value, or raise the carried error.
    """
    if isinstance(result, Failure):
        raise result.error
    return result.value
