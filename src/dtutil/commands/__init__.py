"""Subcommand modules for dtutil.

Provides register_commands(), which imports command modules lazily so
``dtutil --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the format, parse and diff commands on the root group."""
    from dtutil.commands.diff import diff
    from dtutil.commands.format_cmd import format_cmd
    from dtutil.commands.parse import parse

    cli.add_command(format_cmd)
    cli.add_command(parse)
    cli.add_command(diff)
