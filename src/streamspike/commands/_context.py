"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Owns the pipeline service, the console writer, the
async entry point, and result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, ClassVar

import anyio
import click

from streamspike.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    import httpx

    from streamspike.config.settings import SpikeSettings
    from streamspike.services.pipeline import PipelineService
    from streamspike.services.result import ServiceResult
    from streamspike.services.steps import Emit


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    In ``--json`` mode console writes are captured instead of echoed and
    attached to the result as ``data.console``, so stdout carries a single
    JSON document.
    """

    # Swapped for an ``httpx.MockTransport`` in tests.
    http_transport: ClassVar[httpx.AsyncBaseTransport | None] = None

    def __init__(self, settings: SpikeSettings) -> None:
        self.settings = settings
        self._pipeline: PipelineService | None = None
        self._captured: list[str] | None = [] if settings.json_output else None

        from streamspike.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def pipeline(self) -> PipelineService:
        """The pipeline service (created lazily on first access)."""
        if self._pipeline is None:
            from streamspike.services.pipeline import PipelineService

            self._pipeline = PipelineService(self.settings, transport=self.http_transport)
        return self._pipeline

    @property
    def console(self) -> Emit:
        """Writer for step console output."""
        if self._captured is not None:
            return self._captured.append
        return click.echo

    def run(self, func: Callable[..., Awaitable[ServiceResult]], *args: object) -> ServiceResult:
        """Drive one async service call to completion on a fresh event loop."""
        return anyio.run(func, *args)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        if self._captured is not None:
            result = result.model_copy(
                update={"data": {**result.data, "console": list(self._captured)}}
            )
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
