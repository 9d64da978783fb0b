"""Date-time pattern compiler.

Patterns use the familiar letter notation (``yyyy-MM-dd HH:mm:ss``):
a run of the same ASCII letter is one field, ``'quoted text'`` is a
literal, ``''`` is a single quote, and any other non-letter character is
copied through as-is.

Supported letters:

======  ==========================  ==================================
Letter  Field                       Forms
======  ==========================  ==================================
G       era                         ``G``-``GGG`` AD, ``GGGG`` Anno Domini, ``GGGGG`` A
u, y    year                        ``yy`` two digits (base 2000), otherwise min width
M, L    month of year               ``M``/``MM`` number, ``MMM`` Jan, ``MMMM`` January, ``MMMMM`` J
d       day of month                ``d``/``dd``
D       day of year                 ``D``/``DD``/``DDD``
E       day of week                 ``E``-``EEE`` Tue, ``EEEE`` Tuesday, ``EEEEE`` T
a       AM/PM marker                ``a``
H       hour of day (0-23)          ``H``/``HH``
k       clock hour of day (1-24)    ``k``/``kk``
K       hour of AM/PM (0-11)        ``K``/``KK``
h       clock hour of AM/PM (1-12)  ``h``/``hh``
m       minute                      ``m``/``mm``
s       second                      ``s``/``ss``
S       fraction of second          ``S`` x n gives n digits (max 9)
n       nano of second              min width
N       nano of day                 min width
A       milli of day                min width
======  ==========================  ==================================

A single letter is variable width; repeating it fixes the width.
Names are English only. The narrow month and weekday forms (``MMMMM``,
``LLLLL``, ``EEEEE``) share letters between values, so they format but
cannot be parsed.

Parsing is strict. The whole text must match, fixed-width fields take
exactly their width, names are case-sensitive, every value must be in
range, and the parsed fields must resolve to exactly one date-time:
a year with month and day (or day of year), plus an hour from a 24-hour
letter or from a 12-hour letter with ``a``. Minute, second and fraction
default to zero. Fields parsed twice (``M`` and ``L``, ``S`` and ``n``,
``H`` and ``h``/``a``, ``d`` and ``D``) must agree, and a parsed day of
week must match the resolved date.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from functools import lru_cache

from dtutil.domain.errors import DateTimeParseError, InvalidArgumentError, InvalidPatternError

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
DAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
ERA_NAMES: tuple[str, str, str] = ("AD", "Anno Domini", "A")

SUPPORTED_LETTERS = frozenset("GuyMLdDEaHkKhmsSnNA")
# Valid letters in the wider notation whose fields are out of scope here
# (quarters, week-based and localized fields, zones, padding).
UNSUPPORTED_LETTERS = frozenset("QqYwWecFVzOXxZp")
RESERVED_CHARS = frozenset("#{}[]")

_MAX_WIDTH = 19
_MAX_COUNT: dict[str, int] = {
    "G": 5,
    "u": _MAX_WIDTH,
    "y": _MAX_WIDTH,
    "M": 5,
    "L": 5,
    "d": 2,
    "D": 3,
    "E": 5,
    "a": 1,
    "H": 2,
    "k": 2,
    "K": 2,
    "h": 2,
    "m": 2,
    "s": 2,
    "S": 9,
    "n": _MAX_WIDTH,
    "N": _MAX_WIDTH,
    "A": _MAX_WIDTH,
}

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_DAY = 86_400 * _NANOS_PER_SECOND
_MILLIS_PER_DAY = 86_400_000

_RANGES: dict[str, tuple[int, int]] = {
    "year": (1, 9999),
    "month": (1, 12),
    "day_of_month": (1, 31),
    "day_of_year": (1, 366),
    "hour_of_day": (0, 23),
    "clock_hour_of_day": (1, 24),
    "hour_of_ampm": (0, 11),
    "clock_hour_of_ampm": (1, 12),
    "minute": (0, 59),
    "second": (0, 59),
    "nano": (0, _NANOS_PER_SECOND - 1),
    "nano_of_day": (0, _NANOS_PER_DAY - 1),
    "milli_of_day": (0, _MILLIS_PER_DAY - 1),
}

_FIELD_NAMES: dict[str, str] = {
    "d": "day_of_month",
    "D": "day_of_year",
    "H": "hour_of_day",
    "k": "clock_hour_of_day",
    "K": "hour_of_ampm",
    "h": "clock_hour_of_ampm",
    "m": "minute",
    "s": "second",
    "n": "nano",
    "N": "nano_of_day",
    "A": "milli_of_day",
}


@dataclass(frozen=True)
class Literal:
    """Text copied verbatim when formatting and matched exactly when parsing."""

    text: str


@dataclass(frozen=True)
class Field:
    """A run of *count* identical pattern letters."""

    letter: str
    count: int


Token = Literal | Field


# --- Tokenizing ---


def _tokenize(pattern: str) -> tuple[Token, ...]:
    tokens: list[Token] = []
    pending: list[str] = []

    def flush() -> None:
        if pending:
            tokens.append(Literal("".join(pending)))
            pending.clear()

    i = 0
    length = len(pattern)
    while i < length:
        ch = pattern[i]
        if ch == "'":
            end = i + 1
            buf: list[str] = []
            while True:
                if end >= length:
                    raise InvalidPatternError(
                        f"Pattern ends with an incomplete string literal: {pattern}",
                        pattern=pattern,
                    )
                if pattern[end] == "'":
                    if end + 1 < length and pattern[end + 1] == "'":
                        buf.append("'")
                        end += 2
                        continue
                    break
                buf.append(pattern[end])
                end += 1
            pending.append("".join(buf) if end > i + 1 else "'")
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            end = i
            while end < length and pattern[end] == ch:
                end += 1
            flush()
            tokens.append(_check_field(pattern, ch, end - i))
            i = end
        elif ch in RESERVED_CHARS:
            raise InvalidPatternError(
                f"Pattern includes reserved character: '{ch}'",
                pattern=pattern,
                character=ch,
            )
        else:
            pending.append(ch)
            i += 1
    flush()
    return tuple(tokens)


def _check_field(pattern: str, letter: str, count: int) -> Field:
    if letter in UNSUPPORTED_LETTERS:
        raise InvalidPatternError(
            f"Unsupported pattern letter: {letter}",
            pattern=pattern,
            letter=letter,
        )
    if letter not in SUPPORTED_LETTERS:
        raise InvalidPatternError(
            f"Unknown pattern letter: {letter}",
            pattern=pattern,
            letter=letter,
        )
    if count > _MAX_COUNT[letter]:
        raise InvalidPatternError(
            f"Too many pattern letters: {letter * count}",
            pattern=pattern,
            letter=letter,
        )
    return Field(letter, count)


# --- Per-field rendering and matching ---


def _alternation(names: tuple[str, ...] | list[str]) -> str:
    unique = sorted(set(names), key=len, reverse=True)
    return "|".join(re.escape(name) for name in unique)


def _month_names(count: int) -> tuple[str, ...]:
    if count == 3:
        return tuple(name[:3] for name in MONTH_NAMES)
    if count == 4:
        return MONTH_NAMES
    return tuple(name[0] for name in MONTH_NAMES)


def _day_names(count: int) -> tuple[str, ...]:
    if count <= 3:
        return tuple(name[:3] for name in DAY_NAMES)
    if count == 4:
        return DAY_NAMES
    return tuple(name[0] for name in DAY_NAMES)


def _era_name(count: int) -> str:
    if count <= 3:
        return ERA_NAMES[0]
    return ERA_NAMES[count - 3]


def _field_regex(tok: Field) -> str:
    letter, count = tok.letter, tok.count
    if letter in "uy":
        if count == 2:
            return "[0-9]{2}"
        if count < 4:
            return f"[0-9]{{{count},4}}"
        return f"[0-9]{{{count}}}"
    if letter in "ML" and count >= 3:
        return _alternation(_month_names(count))
    if letter == "E":
        return _alternation(_day_names(count))
    if letter == "G":
        return re.escape(_era_name(count))
    if letter == "a":
        return "AM|PM"
    if letter == "S":
        return f"[0-9]{{{count}}}"
    if letter == "D":
        return f"[0-9]{{{count},3}}"
    if letter in "nNA":
        return f"[0-9]{{{count},{_MAX_WIDTH}}}"
    # d H k K h m s, and numeric M/L
    return "[0-9]{1,2}" if count == 1 else "[0-9]{2}"


def _render_field(tok: Field, value: datetime) -> str:
    letter, count = tok.letter, tok.count
    nanos = value.microsecond * 1_000
    if letter in "uy":
        if count == 2:
            return f"{value.year % 100:02d}"
        return str(value.year).zfill(count)
    if letter in "ML":
        if count >= 3:
            return _month_names(count)[value.month - 1]
        return str(value.month).zfill(count)
    if letter == "E":
        return _day_names(count)[value.weekday()]
    if letter == "G":
        return _era_name(count)
    if letter == "a":
        return "AM" if value.hour < 12 else "PM"
    if letter == "S":
        return f"{nanos:09d}"[:count]

    numbers = {
        "d": value.day,
        "D": value.timetuple().tm_yday,
        "H": value.hour,
        "k": value.hour or 24,
        "K": value.hour % 12,
        "h": value.hour % 12 or 12,
        "m": value.minute,
        "s": value.second,
        "n": nanos,
        "N": _second_of_day(value) * _NANOS_PER_SECOND + nanos,
        "A": _second_of_day(value) * 1_000 + value.microsecond // 1_000,
    }
    return str(numbers[letter]).zfill(count)


def _second_of_day(value: datetime) -> int:
    return value.hour * 3_600 + value.minute * 60 + value.second


def _read_field(tok: Field, raw: str) -> tuple[str, int]:
    """Convert the matched text of one field into ``(field_name, value)``."""
    letter, count = tok.letter, tok.count
    if letter in "uy":
        year = int(raw)
        return "year", 2000 + year if count == 2 else year
    if letter in "ML":
        if count >= 3:
            return "month", _month_names(count).index(raw) + 1
        return "month", int(raw)
    if letter == "E":
        return "day_of_week", _day_names(count).index(raw)
    if letter == "G":
        return "era", 1
    if letter == "a":
        return "ampm", 0 if raw == "AM" else 1
    if letter == "S":
        return "nano", int(raw.ljust(9, "0"))
    return _FIELD_NAMES[letter], int(raw)


# --- Resolution ---


def _store(fields: dict[str, int], name: str, value: int, ctx: _ParseContext) -> None:
    bounds = _RANGES.get(name)
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise ctx.error(
            f"Invalid value for {name} (valid values {bounds[0]} - {bounds[1]}): {value}",
            field=name,
            value=value,
        )
    previous = fields.setdefault(name, value)
    if previous != value:
        raise ctx.error(
            f"Conflicting values for {name}: {previous} differs from {value}",
            field=name,
        )


def _resolve_date(fields: dict[str, int], ctx: _ParseContext) -> date:
    year = fields.get("year")
    month = fields.get("month")
    day = fields.get("day_of_month")
    day_of_year = fields.get("day_of_year")
    if year is None or (day_of_year is None and (month is None or day is None)):
        raise ctx.error("Unable to obtain a date: year, month and day are required")

    if month is not None and day is not None:
        try:
            resolved = date(year, month, day)
        except ValueError as exc:
            raise ctx.error(f"Invalid date: {exc}") from None
    else:
        if day_of_year > (366 if calendar.isleap(year) else 365):
            raise ctx.error(f"Invalid date: day of year {day_of_year} is out of range for {year}")
        resolved = date(year, 1, 1) + timedelta(days=day_of_year - 1)

    if day_of_year is not None and resolved.timetuple().tm_yday != day_of_year:
        raise ctx.error(f"Conflicting values: day of year {day_of_year} does not match {resolved}")
    weekday = fields.get("day_of_week")
    if weekday is not None and resolved.weekday() != weekday:
        raise ctx.error(
            f"Conflicting values: {resolved} is a {DAY_NAMES[resolved.weekday()]},"
            f" not a {DAY_NAMES[weekday]}"
        )
    return resolved


def _resolve_hour(fields: dict[str, int], ctx: _ParseContext) -> int | None:
    ampm = fields.get("ampm")
    candidates: list[int] = []
    if "hour_of_day" in fields:
        candidates.append(fields["hour_of_day"])
    if "clock_hour_of_day" in fields:
        candidates.append(fields["clock_hour_of_day"] % 24)
    for name, to_hour in (
        ("hour_of_ampm", lambda h: h),
        ("clock_hour_of_ampm", lambda h: h % 12),
    ):
        if name in fields:
            if ampm is None:
                raise ctx.error("Unable to obtain a time: 12-hour field requires an AM/PM marker")
            candidates.append(to_hour(fields[name]) + 12 * ampm)
    if not candidates:
        return None
    hour = candidates[0]
    if any(other != hour for other in candidates[1:]):
        raise ctx.error("Conflicting values for hour fields")
    if ampm is not None and hour // 12 != ampm:
        raise ctx.error(f"Conflicting values: hour {hour} does not match the AM/PM marker")
    return hour


def _resolve_time(fields: dict[str, int], ctx: _ParseContext) -> tuple[int, int, int, int]:
    """Return ``(hour, minute, second, nano)``."""
    resolved: tuple[int, int, int, int] | None = None
    hour = _resolve_hour(fields, ctx)
    if hour is not None:
        resolved = (
            hour,
            fields.get("minute", 0),
            fields.get("second", 0),
            fields.get("nano", 0),
        )

    for name, scale in (("nano_of_day", 1), ("milli_of_day", 1_000_000)):
        if name not in fields:
            continue
        nano_of_day = fields[name] * scale
        seconds, nano = divmod(nano_of_day, _NANOS_PER_SECOND)
        derived = (seconds // 3_600, seconds // 60 % 60, seconds % 60, nano)
        if resolved is None:
            resolved = derived
        elif resolved != derived:
            raise ctx.error(f"Conflicting values for {name} and time-of-day fields")

    if resolved is None:
        raise ctx.error("Unable to obtain a time: an hour field is required")
    return resolved


@dataclass(frozen=True)
class _ParseContext:
    text: str
    pattern: str

    def error(self, reason: str, **detail: object) -> DateTimeParseError:
        return DateTimeParseError(
            f"Text '{self.text}' could not be parsed with pattern '{self.pattern}': {reason}",
            text=self.text,
            pattern=self.pattern,
            **detail,
        )


# --- Public API ---


@dataclass(frozen=True)
class CompiledPattern:
    """An immutable, reusable pattern.

    Attributes:
        pattern: The source pattern string.
        tokens: Literal and field tokens in pattern order.
    """

    pattern: str
    tokens: tuple[Token, ...]
    regex: re.Pattern[str] = field(repr=False, compare=False)

    @property
    def fields(self) -> tuple[Field, ...]:
        return tuple(tok for tok in self.tokens if isinstance(tok, Field))

    def format(self, value: datetime) -> str:
        """Render *value* according to this pattern."""
        parts: list[str] = []
        for tok in self.tokens:
            if isinstance(tok, Literal):
                parts.append(tok.text)
            else:
                parts.append(_render_field(tok, value))
        return "".join(parts)

    def parse(self, text: str) -> datetime:
        """Strictly parse *text* into a naive datetime.

        Raises:
            DateTimeParseError: If the text does not match the pattern or the
                parsed fields do not resolve to a valid date-time.
            InvalidPatternError: If the pattern uses a narrow month or weekday.
        """
        for tok in self.fields:
            if tok.count == 5 and tok.letter in "MLE":
                raise InvalidPatternError(
                    f"Narrow text field cannot be parsed: {tok.letter * 5}",
                    pattern=self.pattern,
                    letter=tok.letter,
                )
        ctx = _ParseContext(text, self.pattern)
        match = self.regex.fullmatch(text)
        if match is None:
            partial = self.regex.match(text)
            if partial is not None:
                raise ctx.error(f"unparsed text found at index {partial.end()}", index=partial.end())
            raise ctx.error("text does not match the pattern")

        fields: dict[str, int] = {}
        field_tokens = self.fields
        for index, tok in enumerate(field_tokens):
            name, value = _read_field(tok, match.group(f"f{index}"))
            _store(fields, name, value, ctx)

        day = _resolve_date(fields, ctx)
        hour, minute, second, nano = _resolve_time(fields, ctx)
        return datetime(day.year, day.month, day.day, hour, minute, second, nano // 1_000)


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile *pattern*, reusing a cached result when possible.

    Raises:
        InvalidArgumentError: If *pattern* is None or not a string.
        InvalidPatternError: If the pattern is malformed or unsupported.
    """
    if pattern is None:
        raise InvalidArgumentError("Pattern cannot be null", argument="pattern")
    if not isinstance(pattern, str):
        raise InvalidPatternError(
            f"Pattern must be a string, got {type(pattern).__name__}",
            pattern=repr(pattern),
        )
    return _compile(pattern)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> CompiledPattern:
    tokens = _tokenize(pattern)
    parts: list[str] = []
    index = 0
    for tok in tokens:
        if isinstance(tok, Literal):
            parts.append(re.escape(tok.text))
        else:
            parts.append(f"(?P<f{index}>{_field_regex(tok)})")
            index += 1
    return CompiledPattern(pattern=pattern, tokens=tokens, regex=re.compile("".join(parts)))
