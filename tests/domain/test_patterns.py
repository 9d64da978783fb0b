"""Tests for the pattern compiler: tokenizing, formatting and strict parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from dtutil.domain.errors import DateTimeParseError, InvalidArgumentError, InvalidPatternError
from dtutil.domain.patterns import Field, Literal, compile_pattern


class TestCompilePattern:
    def test_tokens(self) -> None:
        compiled = compile_pattern("yyyy-MM-dd'T'HH:mm")
        assert compiled.tokens == (
            Field("y", 4),
            Literal("-"),
            Field("M", 2),
            Literal("-"),
            Field("d", 2),
            Literal("T"),
            Field("H", 2),
            Literal(":"),
            Field("m", 2),
        )

    def test_adjacent_literals_merge(self) -> None:
        compiled = compile_pattern("HH' h ', mm")
        assert compiled.tokens == (Field("H", 2), Literal(" h , "), Field("m", 2))

    def test_cached(self) -> None:
        assert compile_pattern("dd.MM.yyyy") is compile_pattern("dd.MM.yyyy")

    def test_fields(self) -> None:
        assert compile_pattern("d/M/y").fields == (Field("d", 1), Field("M", 1), Field("y", 1))

    def test_empty_pattern_is_valid(self) -> None:
        assert compile_pattern("").tokens == ()

    def test_none_pattern(self) -> None:
        with pytest.raises(InvalidArgumentError):
            compile_pattern(None)  # type: ignore[arg-type]

    def test_non_string_pattern(self) -> None:
        with pytest.raises(InvalidPatternError, match="must be a string"):
            compile_pattern(42)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "pattern,message",
        [
            ("not a valid??pattern", "Unknown pattern letter: o"),
            ("yyyy-bb", "Unknown pattern letter: b"),
            ("yyyy-MM-dd VV", "Unsupported pattern letter: V"),
            ("Q yyyy", "Unsupported pattern letter: Q"),
            ("YYYY-ww", "Unsupported pattern letter: Y"),
            ("ddd", "Too many pattern letters: ddd"),
            ("HHH:mm", "Too many pattern letters: HHH"),
            ("aa", "Too many pattern letters: aa"),
            ("MMMMMM", "Too many pattern letters: MMMMMM"),
            ("SSSSSSSSSS", "Too many pattern letters: SSSSSSSSSS"),
            ("yyyy[-MM]", "reserved character: '\\['"),
            ("#yyyy", "reserved character: '#'"),
            ("{yyyy}", "reserved character: '{'"),
            ("yyyy 'unterminated", "incomplete string literal"),
        ],
    )
    def test_invalid_patterns(self, pattern: str, message: str) -> None:
        with pytest.raises(InvalidPatternError, match=message):
            compile_pattern(pattern)

    def test_invalid_pattern_detail(self) -> None:
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_pattern("yyyy-bb")
        assert exc_info.value.code == "INVALID_PATTERN"
        assert exc_info.value.detail["letter"] == "b"
        assert exc_info.value.detail["pattern"] == "yyyy-bb"


class TestFormat:
    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("yyyy-MM-dd", "2024-03-07"),
            ("uuuu", "2024"),
            ("yy", "24"),
            ("y", "2024"),
            ("yyyyy", "02024"),
            ("M/d/y", "3/7/2024"),
            ("MMM", "Mar"),
            ("MMMM", "March"),
            ("MMMMM", "M"),
            ("LLL", "Mar"),
            ("E", "Thu"),
            ("EEE", "Thu"),
            ("EEEE", "Thursday"),
            ("EEEEE", "T"),
            ("D", "67"),
            ("DDD", "067"),
            ("G", "AD"),
            ("GGGG", "Anno Domini"),
            ("GGGGG", "A"),
            ("h:mm a", "9:05 AM"),
            ("hh", "09"),
            ("K", "9"),
            ("kk", "09"),
            ("HH:mm:ss.SSS", "09:05:30.123"),
            ("S", "1"),
            ("SSSSSS", "123456"),
            ("SSSSSSSSS", "123456000"),
            ("n", "123456000"),
            ("A", "32730123"),
            ("N", "32730123456000"),
            ("'T'", "T"),
            ("''", "'"),
            ("h 'o''clock' a", "9 o'clock AM"),
            ("dd.MM.yyyy, HH:mm", "07.03.2024, 09:05"),
            ("", ""),
        ],
    )
    def test_render(self, sample: datetime, pattern: str, expected: str) -> None:
        assert compile_pattern(pattern).format(sample) == expected

    @pytest.mark.parametrize(
        "pattern,expected",
        [("h a", "12 AM"), ("K a", "0 AM"), ("k", "24"), ("H", "0"), ("A", "0")],
    )
    def test_midnight(self, pattern: str, expected: str) -> None:
        assert compile_pattern(pattern).format(datetime(2024, 1, 1)) == expected

    @pytest.mark.parametrize(
        "pattern,expected",
        [("h a", "12 PM"), ("K a", "0 PM"), ("k", "12"), ("HH", "12")],
    )
    def test_noon(self, pattern: str, expected: str) -> None:
        assert compile_pattern(pattern).format(datetime(2024, 1, 1, 12)) == expected

    def test_small_year_padding(self) -> None:
        value = datetime(5, 1, 1)
        assert compile_pattern("yyyy").format(value) == "0005"
        assert compile_pattern("yy").format(value) == "05"
        assert compile_pattern("y").format(value) == "5"


class TestParse:
    @pytest.mark.parametrize(
        "pattern,text,expected",
        [
            ("dd.MM.yyyy HH:mm", "07.03.2024 09:05", datetime(2024, 3, 7, 9, 5)),
            ("yyyyMMddHHmmss", "20240307090530", datetime(2024, 3, 7, 9, 5, 30)),
            ("d/M/y H:m", "7/3/2024 9:5", datetime(2024, 3, 7, 9, 5)),
            ("d/M/y H:m", "17/11/2024 19:45", datetime(2024, 11, 17, 19, 45)),
            ("d MMM yyyy, h:mm a", "7 Mar 2024, 9:05 PM", datetime(2024, 3, 7, 21, 5)),
            (
                "EEEE, MMMM d, yyyy HH:mm",
                "Thursday, March 7, 2024 09:05",
                datetime(2024, 3, 7, 9, 5),
            ),
            ("yyyy-DDD HH", "2024-067 09", datetime(2024, 3, 7, 9)),
            ("yy-MM-dd HH", "24-03-07 09", datetime(2024, 3, 7, 9)),
            (
                "yyyy-MM-dd HH:mm:ss.SSS",
                "2024-03-07 09:05:30.123",
                datetime(2024, 3, 7, 9, 5, 30, 123000),
            ),
            (
                "yyyy-MM-dd HH:mm:ss.SSSSSSSSS",
                "2024-03-07 09:05:30.123456789",
                datetime(2024, 3, 7, 9, 5, 30, 123456),
            ),
            ("yyyy-MM-dd A", "2024-03-07 32730123", datetime(2024, 3, 7, 9, 5, 30, 123000)),
            ("yyyy-MM-dd kk:mm", "2024-03-07 24:00", datetime(2024, 3, 7, 0, 0)),
            ("yyyy-MM-dd hh:mm a", "2024-03-07 12:30 AM", datetime(2024, 3, 7, 0, 30)),
            ("yyyy-MM-dd KK:mm a", "2024-03-07 00:30 PM", datetime(2024, 3, 7, 12, 30)),
            ("yyyy-MM-dd HH", "2024-03-07 09", datetime(2024, 3, 7, 9)),
            ("G yyyy-MM-dd HH", "AD 2024-03-07 09", datetime(2024, 3, 7, 9)),
            ("yyyy-MM-dd HH a", "2024-03-07 21 PM", datetime(2024, 3, 7, 21)),
            ("yyyy-MM-dd HH'h'", "2024-02-29 23h", datetime(2024, 2, 29, 23)),
        ],
    )
    def test_parse(self, pattern: str, text: str, expected: datetime) -> None:
        assert compile_pattern(pattern).parse(text) == expected

    @pytest.mark.parametrize(
        "pattern,text,reason",
        [
            ("yyyy-MM-dd HH:mm", "2024-02-30 10:00", "Invalid date"),
            ("yyyy-MM-dd HH:mm", "2023-02-29 10:00", "Invalid date"),
            ("yyyy-MM-dd HH:mm", "2024-03-32 10:00", "day_of_month"),
            ("yyyy-MM-dd HH:mm", "2024-13-07 10:00", "month"),
            ("yyyy-MM-dd HH:mm", "2024-03-07 24:00", "hour_of_day"),
            ("yyyy-MM-dd HH:mm", "2024-03-07 10:60", "minute"),
            ("yyyy-MM-dd HH:mm", "0000-03-07 10:00", "year"),
            ("yyyy-MM-dd HH:mm", "2024-3-07 10:00", "does not match"),
            ("yyyy-MM-dd HH:mm", " 2024-03-07 10:00", "does not match"),
            ("yyyy-MM-dd HH:mm", "2024-03-07 10:00 ", "unparsed text found at index 16"),
            ("yyyy-MM-dd HH:mm", "2024/03/07 10:00", "does not match"),
            ("yyyy-MMM-dd HH", "2024-mar-07 09", "does not match"),
            ("yyyy-DDD HH", "2023-366 09", "out of range"),
            ("yyyy-DDD HH", "9999-366 00", "day of year 366 is out of range for 9999"),
            ("yyyy-MM-dd", "2024-03-07", "hour field is required"),
            ("MM-dd HH:mm", "03-07 10:00", "year, month and day are required"),
            ("yyyy-MM HH:mm", "2024-03 10:00", "year, month and day are required"),
            ("yyyy-MM-dd hh:mm", "2024-03-07 09:05", "requires an AM/PM marker"),
            ("EEE yyyy-MM-dd HH", "Fri 2024-03-07 09", "is a Thursday, not a Friday"),
            ("yyyy-MM-dd MMM HH", "2024-03-07 Apr 09", "Conflicting values for month"),
            ("yyyy-MM-dd HH a", "2024-03-07 09 PM", "AM/PM marker"),
            ("yyyy-MM-dd-DDD HH", "2024-03-07-068 09", "day of year 68"),
        ],
    )
    def test_parse_errors(self, pattern: str, text: str, reason: str) -> None:
        with pytest.raises(DateTimeParseError, match=reason):
            compile_pattern(pattern).parse(text)

    def test_parse_error_carries_text_and_pattern(self) -> None:
        with pytest.raises(DateTimeParseError) as exc_info:
            compile_pattern("yyyy-MM-dd HH:mm").parse("2024-03-32 10:00")
        err = exc_info.value
        assert err.code == "PARSE_ERROR"
        assert err.detail["text"] == "2024-03-32 10:00"
        assert err.detail["pattern"] == "yyyy-MM-dd HH:mm"
        assert "2024-03-32 10:00" in err.message

    @pytest.mark.parametrize(
        "pattern,text",
        [
            ("EEEEE yyyy-MM-dd HH", "T 2024-06-06 09"),
            ("d MMMMM yyyy HH", "6 J 2024 09"),
            ("d LLLLL yyyy HH", "6 J 2024 09"),
        ],
    )
    def test_narrow_forms_are_format_only(self, pattern: str, text: str) -> None:
        compiled = compile_pattern(pattern)
        assert compiled.format(datetime(2024, 6, 6, 9)) == text
        with pytest.raises(InvalidPatternError, match="Narrow text field cannot be parsed"):
            compiled.parse(text)

    def test_narrow_era_parses(self) -> None:
        assert compile_pattern("GGGGG yyyy-MM-dd HH").parse("A 2024-06-06 09") == datetime(
            2024, 6, 6, 9
        )


ROUND_TRIP_VALUES = [
    datetime(2024, 3, 7, 9, 5, 30, 123456),
    datetime(2000, 1, 1, 0, 0, 0),
    datetime(1999, 12, 31, 23, 59, 59, 999999),
    datetime(2024, 2, 29, 12, 0, 1, 500),
    datetime(9999, 12, 31, 12, 30, 45, 1),
]

# (pattern, the components the pattern can carry)
ROUND_TRIP_PATTERNS = [
    ("yyyy-MM-dd HH:mm:ss", lambda v: v.replace(microsecond=0)),
    ("dd/MM/yyyy hh:mm:ss a", lambda v: v.replace(microsecond=0)),
    ("EEEE d MMMM yyyy HH:mm", lambda v: v.replace(second=0, microsecond=0)),
    ("uuuu-MM-dd kk:mm", lambda v: v.replace(second=0, microsecond=0)),
    ("yyyyDDD'T'HHmmss.SSSSSS", lambda v: v),
    ("yyyy-MM-dd A", lambda v: v.replace(microsecond=v.microsecond // 1000 * 1000)),
    ("yyyy-MM-dd N", lambda v: v),
]


@pytest.mark.parametrize("value", ROUND_TRIP_VALUES, ids=lambda v: v.isoformat())
@pytest.mark.parametrize(
    "pattern,kept", ROUND_TRIP_PATTERNS, ids=[pattern for pattern, _ in ROUND_TRIP_PATTERNS]
)
def test_round_trip_keeps_represented_components(value: datetime, pattern: str, kept) -> None:
    compiled = compile_pattern(pattern)
    assert compiled.parse(compiled.format(value)) == kept(value)
