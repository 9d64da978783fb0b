"""Format, parse and diff naive date-time values.

These are pure functions: no state is kept between calls and inputs are
never modified. Every failure is a subclass of
:class:`~dtutil.domain.errors.DateTimeUtilError`.

INVARIANT: only naive ``datetime`` values are accepted. Aware values are
rejected instead of having their offset silently dropped.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from dtutil.domain.errors import InvalidArgumentError
from dtutil.domain.patterns import compile_pattern
from dtutil.domain.units import Unit, micros_per, months_per

DEFAULT_FORMAT_PATTERN = "MM/dd/yyyy HH:mm"
ISO_MINUTE_PATTERN = "yyyy-MM-dd'T'HH:mm"
ISO_SECOND_PATTERN = "yyyy-MM-dd'T'HH:mm:ss"
ISO_LAYOUTS: tuple[str, str] = ("yyyy-MM-ddTHH:mm", "yyyy-MM-ddTHH:mm:ss")

_ISO_MINUTE_LENGTH = len("2024-01-01T00:00")
_ONE_MICROSECOND = timedelta(microseconds=1)


def _require_datetime(value: Any, argument: str) -> datetime:
    if value is None:
        raise InvalidArgumentError(f"{argument} cannot be null", argument=argument)
    if not isinstance(value, datetime):
        raise InvalidArgumentError(
            f"{argument} must be a datetime, got {type(value).__name__}",
            argument=argument,
        )
    if value.tzinfo is not None:
        raise InvalidArgumentError(
            f"{argument} must be a naive datetime (no time zone)",
            argument=argument,
        )
    return value


def _require_text(value: Any, argument: str) -> str:
    if value is None or value == "":
        raise InvalidArgumentError(f"{argument} cannot be null or empty", argument=argument)
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{argument} must be a string, got {type(value).__name__}",
            argument=argument,
        )
    return value


def format_datetime(value: datetime, pattern: str | None = None) -> str:
    """Render *value* as text.

    Without a pattern the layout is ``MM/dd/yyyy HH:mm``
    (e.g. ``03/07/2024 09:05``).

    Raises:
        InvalidArgumentError: If *value* is None or not a naive datetime.
        InvalidPatternError: If *pattern* cannot be compiled.
    """
    value = _require_datetime(value, "date")
    compiled = compile_pattern(DEFAULT_FORMAT_PATTERN if pattern is None else pattern)
    return compiled.format(value)


def parse_datetime(text: str, pattern: str | None = None) -> datetime:
    """Parse *text* into a naive datetime.

    Without a pattern exactly two layouts are accepted:
    ``yyyy-MM-ddTHH:mm`` and ``yyyy-MM-ddTHH:mm:ss`` (seconds default to 0).

    Raises:
        InvalidArgumentError: If *text* is None or empty.
        InvalidPatternError: If *pattern* cannot be compiled or cannot be parsed
            (narrow month and weekday forms).
        DateTimeParseError: If *text* does not conform.
    """
    text = _require_text(text, "text")
    if pattern is None:
        pattern = ISO_MINUTE_PATTERN if len(text) <= _ISO_MINUTE_LENGTH else ISO_SECOND_PATTERN
    return compile_pattern(pattern).parse(text)


def datetime_diff(start: datetime, end: datetime, unit: Unit) -> int:
    """Whole *unit* granules from *start* to *end*, truncated toward zero.

    Negative when *end* precedes *start*. Date-based units count a day
    only once the end's time of day has reached the start's, so 47 hours
    is one day, not two.

    Raises:
        InvalidArgumentError: If any argument is None, *unit* is not a
            :class:`Unit` member, or the unit cannot be measured.
    """
    start = _require_datetime(start, "start")
    end = _require_datetime(end, "end")
    if unit is None:
        raise InvalidArgumentError("unit cannot be null", argument="unit")
    if not isinstance(unit, Unit):
        raise InvalidArgumentError(
            f"unit must be a Unit, got {type(unit).__name__}",
            argument="unit",
        )
    if not unit.is_supported:
        raise InvalidArgumentError(f"Unsupported unit: {unit.value}", argument="unit")

    if unit.is_time_based:
        return _time_diff(start, end, unit)
    return _date_diff(start, end, unit)


def _truncated_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _time_diff(start: datetime, end: datetime, unit: Unit) -> int:
    elapsed_us = (end - start) // _ONE_MICROSECOND
    if unit is Unit.NANOS:
        return elapsed_us * 1_000
    return _truncated_div(elapsed_us, micros_per(unit))


def _date_diff(start: datetime, end: datetime, unit: Unit) -> int:
    end_date = end.date()
    # An incomplete final day does not count.
    if end_date > start.date() and end.time() < start.time():
        end_date = date.fromordinal(end_date.toordinal() - 1)
    elif end_date < start.date() and end.time() > start.time():
        end_date = date.fromordinal(end_date.toordinal() + 1)
    start_date = start.date()

    if unit is Unit.ERAS:
        return 0
    if unit in (Unit.DAYS, Unit.WEEKS):
        days = end_date.toordinal() - start_date.toordinal()
        return days if unit is Unit.DAYS else _truncated_div(days, 7)
    return _truncated_div(_months_between(start_date, end_date), months_per(unit))


def _months_between(start: date, end: date) -> int:
    # Packing the day below the month makes an unfinished month truncate.
    packed_start = (start.year * 12 + start.month - 1) * 32 + start.day
    packed_end = (end.year * 12 + end.month - 1) * 32 + end.day
    return _truncated_div(packed_end - packed_start, 32)
