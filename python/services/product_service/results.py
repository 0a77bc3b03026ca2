"""Result values returned by the schema and the persistence gateway.

Operations never raise for expected failures. They return ``Ok`` on success
or one of the four failure kinds below, which the error mapper turns into
HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailure:
    """One message per violated field, in field declaration order."""

    messages: tuple[str, ...]

    @property
    def message(self) -> str:
        return ", ".join(self.messages)


@dataclass(frozen=True)
class MalformedIdentifier:
    product_id: str


@dataclass(frozen=True)
class NotFound:
    product_id: str


@dataclass(frozen=True)
class StorageFault:
    detail: str


Failure = Union[ValidationFailure, MalformedIdentifier, NotFound, StorageFault]
FAILURE_TYPES = (ValidationFailure, MalformedIdentifier, NotFound, StorageFault)

Result = Union[Ok[T], ValidationFailure, MalformedIdentifier, NotFound, StorageFault]
