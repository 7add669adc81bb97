"""The four pipeline step operations.

Each step is a coroutine that scopes its own resource handles and raises
a :class:`~streamspike.errors.PipelineError` subclass on failure. Console
output goes through an ``emit`` callable, called once per console write;
the writer supplies the line terminator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import aclosing
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import httpx

from streamspike.infrastructure.filesystem import append_line, iter_lines, read_text
from streamspike.infrastructure.http import fetch_text

logger = logging.getLogger(__name__)

Emit = Callable[[str], object]
StepName = Literal["print", "lines", "copy", "fetch"]

STEP_ORDER: tuple[StepName, ...] = ("print", "lines", "copy", "fetch")


@dataclass(frozen=True)
class PipelineStep:
    """One unit of I/O work: a step name plus the resources it touches.

    ``source`` is a path for every step except ``fetch``, where it is a
    URL. ``target`` is only set for the appending steps.
    """

    name: StepName
    source: str
    target: str | None = None


async def read_whole_and_print(path: Path, emit: Emit, *, errors: str = "strict") -> int:
    """Emit the full text of *path* as a single console write.

    Returns the number of characters emitted.
    """
    text = await read_text(path, errors=errors)
    emit(text)
    return len(text)


async def read_lines_and_print(path: Path, emit: Emit, *, errors: str = "strict") -> int:
    """Emit each line of *path* as its own console write, in order.

    Returns the number of lines emitted.
    """
    count = 0
    async with aclosing(iter_lines(path, errors=errors)) as lines:
        async for line in lines:
            emit(line)
            count += 1
    return count


async def copy_whole_appending(src: Path, dst: Path, *, errors: str = "strict") -> int:
    """Append the full text of *src* to *dst* as one line.

    *src* is read completely before *dst* is opened, so a failed read
    leaves *dst* untouched. Returns the number of characters appended.
    """
    text = await read_text(src, errors=errors)
    written = await append_line(dst, text)
    logger.debug("Appended %d chars from %s to %s", written, src, dst)
    return written


async def fetch_and_append(
    url: str,
    dst: Path,
    *,
    timeout: float = 5.0,
    follow_redirects: bool = True,
    errors: str = "strict",
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Fetch *url* and append its decoded body to *dst* as one line.

    Nothing is appended unless the fetch and the decode both succeed.
    Returns the number of body bytes received.
    """
    fetched = await fetch_text(
        url,
        timeout=timeout,
        follow_redirects=follow_redirects,
        errors=errors,
        transport=transport,
    )
    await append_line(dst, fetched.text)
    return fetched.byte_count
