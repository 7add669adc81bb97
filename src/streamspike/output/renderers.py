"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from streamspike.output.console import create_console, get_output, style_for_resource

if TYPE_CHECKING:
    from rich.console import Console

    from streamspike.services.result import ServiceResult

_RESOURCE_KEYS = ("source", "target")
_COUNT_KEYS = ("chars", "lines", "bytes")


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
        if result.op == "run" and result.data.get("steps"):
            console.print(_steps_table(result.data["steps"]))

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="spike.ok")
    op = Text(f"  {result.op}", style="spike.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="spike.key")
    if key in _RESOURCE_KEYS:
        v = Text(str(value), style=style_for_resource(str(value)))
    elif key in _COUNT_KEYS:
        v = Text(str(value), style="spike.count")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(Text(f"    {k}: {v}"))


def _steps_table(steps: list[dict[str, Any]]) -> Table:
    """Build a Rich Table summarising step outcomes."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Step", style="spike.op", no_wrap=True)
    table.add_column("Status")
    table.add_column("Source", style="spike.path")
    table.add_column("Target", style="spike.path")
    table.add_column("Result")

    for step in steps:
        if step.get("ok"):
            status = Text("ok", style="spike.ok")
            counts = [f"{key}={step[key]}" for key in _COUNT_KEYS if key in step]
            detail = ", ".join(counts)
        else:
            status = Text("failed", style="spike.error")
            detail = str(step.get("code", ""))
        table.add_row(
            str(step.get("name", "")),
            status,
            str(step.get("source", "")),
            str(step.get("target", "")),
            detail,
        )

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="spike.error")
    op = Text(f"  {result.op}", style="spike.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a run summary; the per-step table only with --verbose."""
    _status_line(console, result)
    _field(console, "completed", result.data.get("completed", 0))
    if verbose and result.data.get("steps"):
        console.print(_steps_table(result.data["steps"]))
        _render_meta(console, result)


def _render_step(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single-step result: resources first, then counters."""
    _status_line(console, result)
    for key in (*_RESOURCE_KEYS, *_COUNT_KEYS):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            import json as _json

            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "run": _render_run,
    "print": _render_step,
    "lines": _render_step,
    "copy": _render_step,
    "fetch": _render_step,
}
