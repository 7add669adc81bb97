"""Shared pytest fixtures and test helpers for streamspike tests."""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable, Generator
from pathlib import Path
from typing import Any, TypeVar

import anyio
import httpx
import pytest
from click.testing import CliRunner

from streamspike.commands._context import AppContext
from streamspike.config.settings import SpikeSettings

T = TypeVar("T")

SAMPLE_TEXT = "hello\nworld"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop every STREAMSPIKE_* variable inherited from the real environment."""
    for name in [key for key in os.environ if key.startswith("STREAMSPIKE_")]:
        monkeypatch.delenv(name)


@pytest.fixture
def work_root(tmp_path: Path) -> Path:
    """Temporary working directory holding ``Input.txt``."""
    (tmp_path / "Input.txt").write_text(SAMPLE_TEXT, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(work_root: Path) -> SpikeSettings:
    """Default settings rooted at the temporary working directory."""
    return SpikeSettings.from_cli(work_root=work_root)


@pytest.fixture
def _isolated_root(work_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp working root so the CLI resolves files there.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(work_root)


@pytest.fixture
def served(monkeypatch: pytest.MonkeyPatch) -> Generator[list[httpx.Request]]:
    """Route CLI HTTP traffic to a canned 200 response; yields the request log."""
    requests: list[httpx.Request] = []
    transport = mock_transport(b"<html>ok</html>", log=requests)
    monkeypatch.setattr(AppContext, "http_transport", transport)
    yield requests


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def run_async(func: Callable[..., Awaitable[T]], *args: Any) -> T:
    """Run a coroutine function to completion on a fresh event loop."""
    return anyio.run(func, *args)


def mock_transport(
    body: bytes = b"",
    *,
    status_code: int = 200,
    log: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Transport answering every request with *status_code* and *body*."""

    def handler(request: httpx.Request) -> httpx.Response:
        if log is not None:
            log.append(request)
        return httpx.Response(status_code, content=body)

    return httpx.MockTransport(handler)


def failing_transport(exc_type: type[httpx.TransportError]) -> httpx.MockTransport:
    """Transport raising *exc_type* for every request."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("simulated failure", request=request)

    return httpx.MockTransport(handler)
