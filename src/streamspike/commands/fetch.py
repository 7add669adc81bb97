"""Command: append the body of a URL to a text file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from streamspike.commands._base import SpikeCommand

if TYPE_CHECKING:
    from streamspike.commands._context import AppContext


@click.command(
    cls=SpikeCommand,
    examples="""\
  streamspike fetch
  streamspike fetch https://example.com/ Example.txt""",
)
@click.argument("url", required=False)
@click.argument("dst", required=False)
@click.pass_obj
def fetch(app: AppContext, url: str | None, dst: str | None) -> None:
    """GET URL and append its UTF-8 body to DST as one line.

    Nothing is written unless the response is 2xx and the body decodes.
    """
    svc = app.pipeline
    app.emit(app.run(svc.run_step, svc.make_step("fetch", url, dst), app.console))
