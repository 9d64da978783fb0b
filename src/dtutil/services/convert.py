"""ConvertService: format, parse and diff behind the ServiceResult contract.

Inputs arrive as text (from the CLI or any other adapter). Date-time
inputs are read with the configured parse pattern, or the ISO layouts
when none is set, before the requested operation runs.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from dtutil.config.logging import operation_context
from dtutil.domain.datetimes import (
    DEFAULT_FORMAT_PATTERN,
    datetime_diff,
    format_datetime,
    parse_datetime,
)
from dtutil.domain.errors import DateTimeUtilError
from dtutil.domain.patterns import compile_pattern
from dtutil.domain.units import Unit
from dtutil.services.result import ServiceResult

if TYPE_CHECKING:
    from dtutil.config.settings import DtSettings

logger = logging.getLogger(__name__)

ISO_INPUT = "yyyy-MM-dd'T'HH:mm[:ss]"


def _components(value: datetime) -> dict[str, Any]:
    return {
        "iso": value.isoformat(),
        "year": value.year,
        "month": value.month,
        "day": value.day,
        "hour": value.hour,
        "minute": value.minute,
        "second": value.second,
        "microsecond": value.microsecond,
    }


def _format_warnings(value: datetime, pattern: str) -> list[str]:
    """Lossy fields in *pattern* that will not read back as *value*."""
    warnings: list[str] = []
    for tok in compile_pattern(pattern).fields:
        if tok.letter in "uy" and tok.count == 2 and not 2000 <= value.year <= 2099:
            short = value.year % 100
            warnings.append(
                f"Two-digit year drops the century: {value.year} is written as"
                f" {short:02d} and reads back as {2000 + short}"
            )
        elif tok.letter in "MLE" and tok.count == 5:
            warnings.append(f"Narrow form {tok.letter * 5} is ambiguous and cannot be parsed back")
    return warnings


class ConvertService:
    """Runs date-time operations and reports them as ServiceResult.

    Patterns and units left as None fall back to *settings*, then to the
    library defaults. ``meta`` records which input pattern (and, for
    diff, which unit source) was used.
    """

    def __init__(self, settings: DtSettings | None = None) -> None:
        self._settings = settings

    @property
    def _format_pattern(self) -> str | None:
        return self._settings.format.pattern if self._settings else None

    @property
    def _parse_pattern(self) -> str | None:
        return self._settings.parse.pattern if self._settings else None

    def _fail(self, op: str, exc: DateTimeUtilError) -> ServiceResult:
        logger.info("failed: [%s] %s", exc.code, exc.message)
        return ServiceResult.failure(op, exc)

    def format(
        self,
        text: str,
        *,
        pattern: str | None = None,
        input_pattern: str | None = None,
    ) -> ServiceResult:
        """Read *text* as a date-time and render it with *pattern*."""
        op = "format"
        pattern = pattern if pattern is not None else self._format_pattern
        input_pattern = input_pattern if input_pattern is not None else self._parse_pattern
        effective = pattern if pattern is not None else DEFAULT_FORMAT_PATTERN
        with operation_context(op, pattern=effective):
            try:
                value = parse_datetime(text, input_pattern)
                rendered = format_datetime(value, effective)
            except DateTimeUtilError as exc:
                return self._fail(op, exc)

            warnings = _format_warnings(value, effective)
            logger.debug("formatted %s as %r", value.isoformat(), rendered)
            return ServiceResult.success(
                op,
                {"text": rendered, "pattern": effective, "input": value.isoformat()},
                warnings=warnings,
                meta={"input_pattern": input_pattern or ISO_INPUT},
            )

    def parse(self, text: str, *, pattern: str | None = None) -> ServiceResult:
        """Parse *text* and report its components."""
        op = "parse"
        pattern = pattern if pattern is not None else self._parse_pattern
        with operation_context(op, pattern=pattern or ISO_INPUT):
            try:
                value = parse_datetime(text, pattern)
            except DateTimeUtilError as exc:
                return self._fail(op, exc)

            logger.debug("parsed %r as %s", text, value.isoformat())
            return ServiceResult.success(
                op, _components(value), meta={"pattern": pattern or ISO_INPUT}
            )

    def diff(
        self,
        start: str,
        end: str,
        *,
        unit: Unit | str | None = None,
        input_pattern: str | None = None,
    ) -> ServiceResult:
        """Whole *unit* granules from *start* to *end* (truncated toward zero)."""
        op = "diff"
        input_pattern = input_pattern if input_pattern is not None else self._parse_pattern
        if unit is not None:
            unit_source = "option"
        elif self._settings is not None:
            unit, unit_source = self._settings.diff.unit, "settings"
        else:
            unit, unit_source = Unit.DAYS, "default"

        with operation_context(op, unit=unit.value if isinstance(unit, Unit) else unit):
            try:
                resolved = Unit.from_name(unit) if isinstance(unit, str) else unit
                start_value = parse_datetime(start, input_pattern)
                end_value = parse_datetime(end, input_pattern)
                value = datetime_diff(start_value, end_value, resolved)
            except DateTimeUtilError as exc:
                return self._fail(op, exc)

            logger.debug("%s -> %s is %d %s", start_value, end_value, value, resolved.value)
            return ServiceResult.success(
                op,
                {
                    "value": value,
                    "unit": resolved.value,
                    "start": start_value.isoformat(),
                    "end": end_value.isoformat(),
                },
                meta={"input_pattern": input_pattern or ISO_INPUT, "unit_source": unit_source},
            )
