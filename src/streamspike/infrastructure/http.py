"""Async HTTP fetching for remote text resources.

One client per fetch: the client and the streamed response are both held
by ``async with`` blocks, so the connection is released on every exit
path. No retries and no custom headers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from streamspike.errors import DecodeError, HttpStatusError, NetworkError

logger = logging.getLogger(__name__)

BODY_ENCODING = "utf-8-sig"


@dataclass(frozen=True)
class FetchedText:
    """Decoded response body plus what was received on the wire."""

    url: str
    status_code: int
    text: str
    byte_count: int


async def fetch_text(
    url: str,
    *,
    timeout: float = 5.0,
    follow_redirects: bool = True,
    errors: str = "strict",
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchedText:
    """GET *url* and return its body decoded as UTF-8.

    The body is always decoded as UTF-8 regardless of any charset the
    server declares.

    Args:
        url: Absolute http(s) URL.
        timeout: Per-operation timeout in seconds.
        follow_redirects: Follow 3xx responses to their final location.
        errors: ``"strict"`` raises on invalid UTF-8; ``"replace"`` substitutes.
        transport: Optional transport override (``httpx.MockTransport`` in tests).

    Raises:
        NetworkError: connection, DNS, timeout, protocol, redirect-loop or
            content-decoding failure.
        HttpStatusError: the final response status is not 2xx.
        DecodeError: the body is not valid UTF-8 and *errors* is ``"strict"``.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                body = await response.aread()
                status_code = response.status_code
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise HttpStatusError(
            f"GET {url} returned {status} {exc.response.reason_phrase}".rstrip(),
            status_code=status,
            url=url,
        ) from exc
    except (httpx.RequestError, httpx.InvalidURL) as exc:
        raise NetworkError(
            f"GET {url} failed: {str(exc) or type(exc).__name__}",
            url=url,
            reason=type(exc).__name__,
        ) from exc

    logger.debug("Fetched %s (%d, %d bytes)", url, status_code, len(body))

    try:
        text = body.decode(BODY_ENCODING, errors=errors)
    except UnicodeDecodeError as exc:
        raise DecodeError(
            f"Response body from {url} is not valid UTF-8 (byte {exc.start})",
            url=url,
            position=exc.start,
        ) from exc
    return FetchedText(url=url, status_code=status_code, text=text, byte_count=len(body))
