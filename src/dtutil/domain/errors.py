"""Typed failures raised by the date-time operations.

Three kinds, each with a stable ``code`` that the service layer copies
into :class:`~dtutil.services.result.ServiceError`:

- ``INVALID_ARGUMENT``: a required input is missing, empty or of the wrong type.
- ``INVALID_PATTERN``: a pattern string cannot be compiled.
- ``PARSE_ERROR``: text does not conform to the pattern or layout.

All three subclass :class:`ValueError` so callers that only care about
"bad input" can catch the builtin.
"""

from __future__ import annotations

from typing import Any, ClassVar


class DateTimeUtilError(ValueError):
    """Base class for every dtutil failure."""

    code: ClassVar[str] = "DTUTIL_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InvalidArgumentError(DateTimeUtilError):
    """A required argument is absent, empty, or not an accepted type."""

    code = "INVALID_ARGUMENT"


class InvalidPatternError(DateTimeUtilError):
    """The pattern is malformed or uses letters the compiler does not support."""

    code = "INVALID_PATTERN"


class DateTimeParseError(DateTimeUtilError):
    """The text is well-typed but does not encode a date-time under the layout."""

    code = "PARSE_ERROR"
