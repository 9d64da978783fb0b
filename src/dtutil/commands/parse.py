"""Command: parse text into a date-time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.commands._base import DtCommand

if TYPE_CHECKING:
    from dtutil.commands._context import AppContext


@click.command(
    cls=DtCommand,
    examples="""\
  dtutil parse 2024-03-07T09:05
  dtutil parse 2024-03-07T09:05:30
  dtutil --json parse "7 Mar 2024, 9:05 PM" -p "d MMM yyyy, h:mm a"
  dtutil parse "03/07/2024 09:05" --pattern "MM/dd/yyyy HH:mm"
  dtutil -q parse 2024-03-07T09:05""",
)
@click.argument("text")
@click.option(
    "-p",
    "--pattern",
    default=None,
    help="Pattern TEXT follows (default: ISO yyyy-MM-ddTHH:mm[:ss]).",
)
@click.pass_obj
def parse(app: AppContext, text: str, pattern: str | None) -> None:
    """Parse TEXT into a date-time and show its components."""
    app.emit(app.service.parse(text, pattern=pattern))
