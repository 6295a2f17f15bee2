"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides lazy Workspace initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from layerctl.config.settings import LayerSettings
    from layerctl.infrastructure.workspace import Workspace
    from layerctl.services.result import ServiceResult

# Exit status for failures that aborted a command (scan or scaffold errors).
EXIT_FAILURE = 2


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and ``--version``
    never load plugins.
    """

    def __init__(self, settings: LayerSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from layerctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

        if settings.verbose:
            from layerctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace instance (created lazily on first access)."""
        if self._workspace is None:
            from layerctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    def emit(self, result: ServiceResult, *, exit_code: int = 0) -> None:
        """Format and output a ServiceResult, then exit with the right status.

        * Success (``result.ok``): writes to stdout; warnings go to stderr
          so they don't pollute piped output. Exits with *exit_code* if
          non-zero (e.g. 1 when violations were found).
        * Failure: writes to stderr and exits with ``EXIT_FAILURE``.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(EXIT_FAILURE)

        if output:
            click.echo(output)
        # In JSON mode, warnings are already in the serialized payload.
        if not settings.json_output and not settings.quiet:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if exit_code:
            raise SystemExit(exit_code)
