"""Error taxonomy for pipeline steps.

Step functions raise these; the service layer converts them into
:class:`~streamspike.services.result.ServiceError` payloads using
``code`` and ``detail``.
"""

from __future__ import annotations

from typing import Any


class PipelineError(Exception):
    """Base class for every failure a pipeline step can report."""

    code = "PIPELINE_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class ResourceNotFound(PipelineError):
    """A local text resource does not exist."""

    code = "RESOURCE_NOT_FOUND"


class DecodeError(PipelineError):
    """Bytes read from a resource are not valid UTF-8."""

    code = "DECODE_ERROR"


class NetworkError(PipelineError):
    """Transport-level failure reaching a remote host."""

    code = "NETWORK_ERROR"


class HttpStatusError(PipelineError):
    """The remote host answered with a non-success status."""

    code = "HTTP_STATUS_ERROR"

    def __init__(self, message: str, *, status_code: int, **detail: Any) -> None:
        super().__init__(message, status_code=status_code, **detail)
        self.status_code = status_code
