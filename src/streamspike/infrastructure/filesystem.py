"""Async text file I/O for pipeline resources.

INVARIANT: Every handle opened here is closed on every exit path.
Handles are held by ``async with`` blocks scoped to a single call (or,
for :func:`iter_lines`, to the lifetime of the generator).

Text is UTF-8. A leading byte-order mark is dropped on read; nothing is
written with one.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import anyio

from streamspike.errors import DecodeError, ResourceNotFound

READ_ENCODING = "utf-8-sig"
WRITE_ENCODING = "utf-8"
LINE_TERMINATOR = "\n"


def _not_found(path: Path, exc: FileNotFoundError) -> ResourceNotFound:
    return ResourceNotFound(f"No such file: {path}", path=str(path), reason=exc.strerror)


def _undecodable(path: Path, exc: UnicodeDecodeError) -> DecodeError:
    return DecodeError(
        f"{path} is not valid UTF-8 (byte {exc.start})",
        path=str(path),
        position=exc.start,
    )


async def read_text(path: Path, *, errors: str = "strict") -> str:
    """Read *path* in full and return the decoded text.

    Line endings are returned exactly as stored (``newline=""``).

    Raises:
        ResourceNotFound: *path* does not exist.
        DecodeError: the content is not valid UTF-8 and *errors* is ``"strict"``.
    """
    try:
        async with await anyio.open_file(
            path, encoding=READ_ENCODING, errors=errors, newline=""
        ) as f:
            return await f.read()
    except FileNotFoundError as exc:
        raise _not_found(path, exc) from exc
    except UnicodeDecodeError as exc:
        raise _undecodable(path, exc) from exc


async def iter_lines(path: Path, *, errors: str = "strict") -> AsyncGenerator[str, None]:
    """Yield the lines of *path* lazily, without their terminators.

    Universal newlines apply, so ``\\n``, ``\\r\\n`` and ``\\r`` all end a
    line. A trailing terminator does not produce an extra empty line.
    The generator is single-pass; the handle is released when it is
    exhausted, when a read fails, or when the generator is closed early.
    """
    try:
        async with await anyio.open_file(path, encoding=READ_ENCODING, errors=errors) as f:
            async for line in f:
                yield line.removesuffix(LINE_TERMINATOR)
    except FileNotFoundError as exc:
        raise _not_found(path, exc) from exc
    except UnicodeDecodeError as exc:
        raise _undecodable(path, exc) from exc


async def append_line(path: Path, text: str) -> int:
    """Append *text* plus one line terminator to *path*.

    Creates the file (and its parent directories) if absent.
    Returns the number of characters written, terminator included.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    async with await anyio.open_file(path, "a", encoding=WRITE_ENCODING, newline="") as f:
        return await f.write(text + LINE_TERMINATOR)
