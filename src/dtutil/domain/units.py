"""Calendar granularities for difference calculation.

Time-based units measure elapsed duration and carry an exact length in
microseconds (``NANOS`` is the one unit finer than a microsecond).
Date-based units compare calendar dates. ``FOREVER`` closes the set but
cannot be measured.
"""

from __future__ import annotations

from enum import Enum

from dtutil.domain.errors import InvalidArgumentError

_US_PER_SECOND = 1_000_000
_US_PER_DAY = 86_400 * _US_PER_SECOND


class Unit(Enum):
    """Closed set of granularities accepted by ``datetime_diff``."""

    NANOS = "nanos"
    MICROS = "micros"
    MILLIS = "millis"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    HALF_DAYS = "half_days"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"
    DECADES = "decades"
    CENTURIES = "centuries"
    MILLENNIA = "millennia"
    ERAS = "eras"
    FOREVER = "forever"

    @property
    def is_time_based(self) -> bool:
        return self in _TIME_UNIT_MICROS or self is Unit.NANOS

    @property
    def is_date_based(self) -> bool:
        return self in _DATE_UNIT_MONTHS or self in (Unit.DAYS, Unit.WEEKS, Unit.ERAS)

    @property
    def is_supported(self) -> bool:
        """Whether a difference can be expressed in this unit."""
        return self is not Unit.FOREVER

    @classmethod
    def from_name(cls, name: str) -> Unit:
        """Resolve a unit from user text (``"days"``, ``"HALF-DAYS"``, ...).

        Raises:
            InvalidArgumentError: If *name* is not a unit name.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Unit name cannot be empty", argument="unit")
        key = name.strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(u.value for u in cls)
            raise InvalidArgumentError(
                f"Unknown unit '{name}' (expected one of: {choices})",
                argument="unit",
                value=name,
            ) from None


# Exact unit lengths in microseconds. NANOS is handled separately.
_TIME_UNIT_MICROS: dict[Unit, int] = {
    Unit.MICROS: 1,
    Unit.MILLIS: 1_000,
    Unit.SECONDS: _US_PER_SECOND,
    Unit.MINUTES: 60 * _US_PER_SECOND,
    Unit.HOURS: 3_600 * _US_PER_SECOND,
    Unit.HALF_DAYS: _US_PER_DAY // 2,
}

# Month-multiple units: the difference in whole months divided by this.
_DATE_UNIT_MONTHS: dict[Unit, int] = {
    Unit.MONTHS: 1,
    Unit.YEARS: 12,
    Unit.DECADES: 120,
    Unit.CENTURIES: 1_200,
    Unit.MILLENNIA: 12_000,
}


def micros_per(unit: Unit) -> int:
    """Length of a time-based unit in microseconds."""
    return _TIME_UNIT_MICROS[unit]


def months_per(unit: Unit) -> int:
    """Number of months in a month-multiple unit."""
    return _DATE_UNIT_MONTHS[unit]
