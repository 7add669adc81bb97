"""Command: run the full four-step pipeline."""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

import click

from streamspike.commands._base import SpikeCommand

if TYPE_CHECKING:
    from streamspike.commands._context import AppContext


@click.command(
    cls=SpikeCommand,
    examples="""\
  streamspike run
  streamspike run --keep-going
  streamspike --json run
  streamspike -c ./streamspike.toml run""",
)
@click.option(
    "--keep-going",
    is_flag=True,
    help="Run every step even after one fails; report all failures.",
)
@click.pass_obj
def run(app: AppContext, keep_going: bool) -> None:
    """Run all four steps in order.

    Prints the input file whole, then line by line, appends it to the output
    file, and appends the fetched URL body to the fetch output file. Stops at
    the first failing step unless --keep-going is given.
    """
    svc = app.pipeline
    app.emit(app.run(functools.partial(svc.run, app.console, keep_going=keep_going)))
