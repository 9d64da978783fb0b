"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the settings and logging setup, and turns a
ServiceResult into output plus an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dtutil.config.logging import configure_logging
from dtutil.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from dtutil.config.settings import DtSettings
    from dtutil.services.convert import ConvertService
    from dtutil.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: DtSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ConvertService:
        from dtutil.services.convert import ConvertService

        return ConvertService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Write a ServiceResult and set the exit status.

        * Success: stdout, exit code 0. Warnings go to stderr outside JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
