"""Subcommand modules for streamspike.

Provides register_commands() which uses deferred imports to keep
``streamspike --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the pipeline command and the single-step commands."""
    from streamspike.commands.copy import copy
    from streamspike.commands.fetch import fetch
    from streamspike.commands.lines import lines
    from streamspike.commands.print_cmd import print_cmd
    from streamspike.commands.run import run

    cli.add_command(run)
    cli.add_command(print_cmd)
    cli.add_command(lines)
    cli.add_command(copy)
    cli.add_command(fetch)
