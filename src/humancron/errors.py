"""Error taxonomy for schedule translation.

Every public operation reports failures through the result carrier in
:mod:`humancron.result`. Internally, helpers raise :class:`ScheduleError`
and the public entry points convert it into an ``Error`` value, so the
exception never escapes to callers.
"""

from __future__ import annotations

from enum import Enum, auto


class ErrorKind(Enum):
    """Categories of translation failures."""

    EMPTY_INPUT = auto()
    GRAMMAR_MISMATCH = auto()
    OUT_OF_RANGE = auto()
    CONFLICTING = auto()
    UNSUPPORTED_BY_DIALECT = auto()
    MALFORMED_FIELD = auto()


class ScheduleError(ValueError):
    """Raised by parsing and codec helpers on invalid input.

    Attributes:
        kind: Failure category.
        text: The phrase or cron expression being processed.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.GRAMMAR_MISMATCH,
        text: str = "",
    ) -> None:
        self.message = message
        self.kind = kind
        self.text = text
        super().__init__(message)
