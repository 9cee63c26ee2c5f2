"""Typed outcomes for registry operations.

Registries never raise for expected business conditions (duplicate email,
full event, last admin...). They return an ``Outcome`` holding either the
value or a ``Failure`` whose kind the caller maps to a user-facing message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from bailago.domain.error import OutcomeError

T = TypeVar("T")


class FailureKind(str, Enum):
    """Kinds of expected business failures."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVARIANT_VIOLATION = "invariant_violation"
    EXPIRED = "expired"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INVALID_STATE = "invalid_state"
    NOT_AUTHORIZED = "not_authorized"


@dataclass(frozen=True)
class Failure:
    """Structured failure signal."""

    kind: FailureKind
    message: str
    code: str | None = None


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a success value or a failure, never both."""

    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> FailureKind | None:
        return self.failure.kind if self.failure else None

    def unwrap(self) -> T:
        """Return the value or raise ``OutcomeError`` for a failure."""
        if self.failure is not None:
            raise OutcomeError(self.failure)
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(
        cls, kind: FailureKind, message: str, code: str | None = None
    ) -> "Outcome[T]":
        return cls(failure=Failure(kind=kind, message=message, code=code))

    @classmethod
    def from_failure(cls, failure: Failure) -> "Outcome[T]":
        """Re-type a failure from another outcome."""
        return cls(failure=failure)
