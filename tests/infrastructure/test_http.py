"""Tests for async HTTP fetching against httpx.MockTransport."""

from __future__ import annotations

import functools

import httpx
import pytest

from streamspike.errors import DecodeError, HttpStatusError, NetworkError
from streamspike.infrastructure.http import FetchedText, fetch_text
from tests.conftest import failing_transport, mock_transport, run_async

URL = "https://example.com/"


def _fetch(transport: httpx.MockTransport, url: str = URL, **kwargs: object) -> FetchedText:
    return run_async(functools.partial(fetch_text, url, transport=transport, **kwargs))


class TestFetchText:
    def test_success(self) -> None:
        requests: list[httpx.Request] = []
        fetched = _fetch(mock_transport(b"<html>hi</html>", log=requests))
        assert fetched.text == "<html>hi</html>"
        assert fetched.status_code == 200
        assert fetched.byte_count == 15
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == URL

    def test_body_decoded_as_utf8(self) -> None:
        fetched = _fetch(mock_transport("grüße".encode()))
        assert fetched.text == "grüße"

    def test_empty_body(self) -> None:
        fetched = _fetch(mock_transport(b"", status_code=204))
        assert fetched.text == ""
        assert fetched.byte_count == 0

    def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/":
                return httpx.Response(302, headers={"Location": "https://example.com/final"})
            return httpx.Response(200, content=b"final")

        fetched = _fetch(httpx.MockTransport(handler))
        assert fetched.text == "final"

    def test_redirect_without_following_is_a_status_error(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(301, headers={"Location": "https://example.com/x"})
        )
        with pytest.raises(HttpStatusError) as excinfo:
            _fetch(transport, follow_redirects=False)
        assert excinfo.value.status_code == 301

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_non_success_status(self, status: int) -> None:
        with pytest.raises(HttpStatusError) as excinfo:
            _fetch(mock_transport(b"nope", status_code=status))
        assert excinfo.value.status_code == status
        assert excinfo.value.detail["url"] == URL
        assert str(status) in excinfo.value.message

    @pytest.mark.parametrize(
        "exc_type",
        [httpx.ConnectError, httpx.ConnectTimeout, httpx.ReadTimeout, httpx.UnsupportedProtocol],
    )
    def test_transport_failures(self, exc_type: type[httpx.TransportError]) -> None:
        with pytest.raises(NetworkError) as excinfo:
            _fetch(failing_transport(exc_type))
        assert excinfo.value.detail["reason"] == exc_type.__name__

    def test_invalid_utf8_body(self) -> None:
        with pytest.raises(DecodeError) as excinfo:
            _fetch(mock_transport(b"caf\xe9"))
        assert excinfo.value.detail["url"] == URL

    def test_invalid_utf8_body_replaced(self) -> None:
        fetched = _fetch(mock_transport(b"caf\xe9"), errors="replace")
        assert fetched.text == "caf\ufffd"

    def test_redirect_loop(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(302, headers={"Location": URL})

        with pytest.raises(NetworkError) as excinfo:
            _fetch(httpx.MockTransport(handler))
        assert excinfo.value.detail["reason"] == "TooManyRedirects"
        assert excinfo.value.detail["url"] == URL
        assert len(requests) > 1

    def test_corrupt_content_encoding(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"notgzip"
            )
        )
        with pytest.raises(NetworkError) as excinfo:
            _fetch(transport)
        assert excinfo.value.detail["reason"] == "DecodingError"
