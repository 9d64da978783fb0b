"""Command: difference between two date-times in a chosen unit."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand
from dtutil.domain.units import Unit

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext

_UNIT_NAMES = [unit.value for unit in Unit if unit.is_supported]


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil diff 2024-01-01T00:00 2024-01-02T23:00
  dtutil diff 2024-01-01T00:00 2024-03-01T00:00 --unit months
  dtutil diff 2024-01-02T00:00 2024-01-01T00:00 -u hours
  dtutil diff "01/01/2024 00:00" "01/08/2024 12:00" -i "MM/dd/yyyy HH:mm" -u weeks""",
)
@click.argument("start")
@click.argument("end")
@click.option(
    "-u",
    "--unit",
    type=click.Choice(_UNIT_NAMES, case_sensitive=False),
    default=None,
    help="Unit of the result (default: days, or [diff] unit from config).",
)
@click.option(
    "-i",
    "--input-pattern",
    default=None,
    help="Pattern for reading START and END (default: ISO yyyy-MM-ddTHH:mm[:ss]).",
)
@click.pass_obj
def diff(
    app: AppContext,
    start: str,
    end: str,
    unit: str | None,
    input_pattern: str | None,
) -> None:
    """Whole UNITs from START to END, truncated toward zero."""
    app.emit(app.service.diff(start, end, unit=unit, input_pattern=input_pattern))
