"""Command: print a text file in full."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from streamspike.commands._base import SpikeCommand

if TYPE_CHECKING:
    from streamspike.commands._context import AppContext


@click.command(
    "print",
    cls=SpikeCommand,
    examples="""\
  streamspike print
  streamspike print notes.txt""",
)
@click.argument("path", required=False)
@click.pass_obj
def print_cmd(app: AppContext, path: str | None) -> None:
    """Print PATH (default: the configured input file) as one block."""
    svc = app.pipeline
    app.emit(app.run(svc.run_step, svc.make_step("print", path), app.console))
