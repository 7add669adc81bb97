"""Command: append one text file to another."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from streamspike.commands._base import SpikeCommand

if TYPE_CHECKING:
    from streamspike.commands._context import AppContext


@click.command(
    cls=SpikeCommand,
    examples="""\
  streamspike copy
  streamspike copy Input.txt Output.txt""",
)
@click.argument("src", required=False)
@click.argument("dst", required=False)
@click.pass_obj
def copy(app: AppContext, src: str | None, dst: str | None) -> None:
    """Append the contents of SRC to DST as one line.

    DST is created if it does not exist. Defaults come from the
    [pipeline] input and output settings.
    """
    svc = app.pipeline
    app.emit(app.run(svc.run_step, svc.make_step("copy", src, dst), app.console))
