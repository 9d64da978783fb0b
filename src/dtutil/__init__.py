"""dtutil: format, parse and diff local date-time values."""

from __future__ import annotations

from dtutil.domain.datetimes import (
    DEFAULT_FORMAT_PATTERN,
    datetime_diff,
    format_datetime,
    parse_datetime,
)
from dtutil.domain.errors import (
    DateTimeParseError,
    DateTimeUtilError,
    InvalidArgumentError,
    InvalidPatternError,
)
from dtutil.domain.patterns import CompiledPattern, compile_pattern
from dtutil.domain.units import Unit

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FORMAT_PATTERN",
    "CompiledPattern",
    "DateTimeParseError",
    "DateTimeUtilError",
    "InvalidArgumentError",
    "InvalidPatternError",
    "Unit",
    "__version__",
    "compile_pattern",
    "datetime_diff",
    "format_datetime",
    "parse_datetime",
]
