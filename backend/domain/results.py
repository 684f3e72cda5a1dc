"""Tagged result values returned by the engine's public entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from backend.domain.errors import BookingError, RejectionKind


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: RejectionKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: BookingError) -> Err:
        return cls(kind=exc.kind, message=exc.message)


Result = Union[Ok[T], Err]
