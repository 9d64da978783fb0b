"""Command: render a date-time with a pattern."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    "format",
    cls=DtCommand,
    examples="""\
  dtutil format 2024-03-07T09:05
  dtutil format 2024-03-07T09:05:30 --pattern "yyyy/MM/dd HH:mm:ss"
  dtutil format 2024-03-07T09:05 -p "EEEE, MMMM d, yyyy h:mm a"
  dtutil format "07.03.2024 09:05" -i "dd.MM.yyyy HH:mm" -p "MM-dd HH:mm"
  dtutil -q format 2024-03-07T09:05""",
)
@click.argument("text")
@click.option("-p", "--pattern", default=None, help="Output pattern (default MM/dd/yyyy HH:mm).")
@click.option(
    "-i",
    "--input-pattern",
    default=None,
    help="Pattern for reading TEXT (default: ISO yyyy-MM-ddTHH:mm[:ss]).",
)
@click.pass_obj
def format_cmd(app: AppContext, text: str, pattern: str | None, input_pattern: str | None) -> None:
    """Format the date-time TEXT with a pattern."""
    app.emit(app.service.format(text, pattern=pattern, input_pattern=input_pattern))
