"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: Every runner method returns ServiceResult.
The CLI consumes this type; step functions raise instead.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from streamspike.errors import PipelineError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PipelineError, *, step: str | None = None) -> ServiceError:
        """Build the payload from a raised pipeline error.

        With *step*, the message is prefixed by the step name and the step
        is recorded in ``detail``.
        """
        if step is None:
            return cls(code=exc.code, message=exc.message, detail=dict(exc.detail))
        return cls(
            code=exc.code,
            message=f"{step}: {exc.message}",
            detail={**exc.detail, "step": step},
        )


class ServiceResult(BaseModel):
    """Universal return type for runner operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"run"`` or a step name).
        data: Operation-specific payload.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
