"""Command: print a text file line by line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from streamspike.commands._base import SpikeCommand

if TYPE_CHECKING:
    from streamspike.commands._context import AppContext


@click.command(
    cls=SpikeCommand,
    examples="""\
  streamspike lines
  streamspike --json lines notes.txt""",
)
@click.argument("path", required=False)
@click.pass_obj
def lines(app: AppContext, path: str | None) -> None:
    """Print each line of PATH (default: the configured input file)."""
    svc = app.pipeline
    app.emit(app.run(svc.run_step, svc.make_step("lines", path), app.console))
