"""Result carrier returned by every parse, format, encode and decode call.

``Result`` is a closed union of :class:`Success` and :class:`Error`.
Consume it with structural pattern matching:

    >>> match parse("every day at 2pm"):
    ...     case Success(value=spec):
    ...         ...
    ...     case Error(message=message):
    ...         ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union, assert_never

from humancron.errors import ErrorKind, ScheduleError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Error:
    """Failed outcome carrying a human-readable message."""

    message: str
    kind: ErrorKind = ErrorKind.GRAMMAR_MISMATCH

    @classmethod
    def from_exception(cls, exc: ScheduleError) -> "Error":
        """Build an error value from an internal exception."""
        return cls(exc.message, exc.kind)

    def wrap(self, context: str) -> "Error":
        """Return a new error with context prepended, keeping the kind.

        Args:
            context: Description of the outer operation.

        Returns:
            Error whose message reads ``"{context}: {message}"``.
        """
        return Error(f"{context}: {self.message}", self.kind)


Result = Union[Success[T], Error]


def unwrap(result: Result[T]) -> T:
    """Return the success value or raise the error as ``ScheduleError``.

    Intended for call sites that treat failure as a programming error,
    such as module-level presets.
    """
    match result:
        case Success(value=value):
            return value
        case Error(message=message, kind=kind):
            raise ScheduleError(message, kind)
        case _ as unreachable:
            assert_never(unreachable)
