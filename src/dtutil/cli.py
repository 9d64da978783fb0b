"""Root CLI group: output and config flags shared by every subcommand."""

from __future__ import annotations

import click
import structlog

from dtutil import __version__
from dtutil.commands import register_commands
from dtutil.commands._context import AppContext
from dtutil.config.settings import DtSettings

log = structlog.get_logger(__name__)

_EPILOG = """\b
Settings are read from, highest priority first:
  command-line flags
  DTUTIL_* environment variables (DTUTIL_DIFF__UNIT=hours)
  dtutil.toml in the working directory or a parent (or DTUTIL_CONFIG)
"""


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EPILOG,
)
@click.version_option(version=__version__, prog_name="dtutil")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the result value.")
@click.option("-v", "--verbose", is_flag=True, help="Show result details and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Read settings from this TOML file instead of dtutil.toml.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Format, parse and diff local date-times."""
    settings = DtSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    log.debug(
        "settings loaded",
        config=str(settings.config_path) if settings.config_path else None,
        format_pattern=settings.format.pattern,
        parse_pattern=settings.parse.pattern,
        diff_unit=settings.diff.unit.value,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
