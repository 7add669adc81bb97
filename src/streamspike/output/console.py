"""Rich Console factory and theme for streamspike output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SPIKE_THEME = Theme(
    {
        "spike.ok": "bold green",
        "spike.error": "bold red",
        "spike.op": "bold cyan",
        "spike.key": "dim",
        "spike.path": "dim",
        "spike.url": "underline blue",
        "spike.count": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=SPIKE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_resource(value: str) -> str:
    """Return the Rich style for a resource address (URL or path)."""
    if value.startswith(("http://", "https://")):
        return "spike.url"
    return "spike.path"
