"""PipelineService — runs the fixed step sequence and reports ServiceResult.

Steps are awaited strictly one after another. By default the first
failing step ends the run; ``keep_going`` runs every step and reports
all failures together. Exceptions outside the pipeline error taxonomy
are not caught here.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from streamspike.errors import PipelineError
from streamspike.services.result import ServiceError, ServiceResult
from streamspike.services.steps import (
    STEP_ORDER,
    Emit,
    PipelineStep,
    StepName,
    copy_whole_appending,
    fetch_and_append,
    read_lines_and_print,
    read_whole_and_print,
)

if TYPE_CHECKING:
    import httpx

    from streamspike.config.settings import SpikeSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepOutcome:
    """What one step did, for reporting."""

    step: PipelineStep
    ok: bool
    counts: dict[str, int] | None = None
    error: ServiceError | None = None

    def resources(self) -> dict[str, Any]:
        """Source, target (if any), and the step's counters."""
        data: dict[str, Any] = {"source": self.step.source}
        if self.step.target is not None:
            data["target"] = self.step.target
        if self.counts:
            data.update(self.counts)
        return data

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.step.name, "ok": self.ok, **self.resources()}
        if self.error is not None:
            data["code"] = self.error.code
            data["message"] = self.error.message
        return data


class PipelineService:
    """Sequential text pipeline runner.

    Usage::

        svc = PipelineService(settings)
        result = anyio.run(svc.run, click.echo)
    """

    def __init__(
        self,
        settings: SpikeSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    # ------------------------------------------------------------------
    # Plan
    # ------------------------------------------------------------------

    def make_step(
        self,
        name: StepName,
        source: str | None = None,
        target: str | None = None,
    ) -> PipelineStep:
        """Build a step, filling unspecified resources from settings."""
        cfg = self._settings.pipeline
        if name in ("print", "lines"):
            return PipelineStep(name=name, source=source or cfg.input)
        if name == "copy":
            return PipelineStep(name=name, source=source or cfg.input, target=target or cfg.output)
        if name == "fetch":
            return PipelineStep(
                name=name,
                source=source or cfg.url,
                target=target or cfg.fetch_output,
            )
        msg = f"Unknown step: {name!r}"
        raise ValueError(msg)

    def build_steps(self) -> list[PipelineStep]:
        """The fixed four-step plan, in execution order."""
        return [self.make_step(name) for name in STEP_ORDER]

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self, emit: Emit, *, keep_going: bool = False) -> ServiceResult:
        """Run every step of the plan in order."""
        started = time.perf_counter()
        steps = self.build_steps()
        outcomes: list[StepOutcome] = []
        first_error: ServiceError | None = None

        for step in steps:
            outcome = await self._attempt(step, emit)
            outcomes.append(outcome)
            if outcome.error is not None:
                first_error = first_error or outcome.error
                if not keep_going:
                    logger.debug("Stopping run after failed step %s", step.name)
                    break

        failed = sum(1 for o in outcomes if not o.ok)
        data: dict[str, Any] = {
            "steps": [o.to_dict() for o in outcomes],
            "completed": len(outcomes) - failed,
            "failed": failed,
            "skipped": len(steps) - len(outcomes),
        }
        meta = {"duration_ms": round((time.perf_counter() - started) * 1000, 2)}

        if first_error is None:
            return ServiceResult(ok=True, op="run", data=data, meta=meta)
        if failed > 1:
            error = ServiceError(
                code="STEPS_FAILED",
                message=f"{failed} of {len(steps)} steps failed",
                detail={"first": first_error.model_dump()},
            )
        else:
            error = first_error
        return ServiceResult(ok=False, op="run", data=data, error=error, meta=meta)

    async def run_step(self, step: PipelineStep, emit: Emit) -> ServiceResult:
        """Run a single step and report it under its own name."""
        started = time.perf_counter()
        outcome = await self._attempt(step, emit)
        meta = {"duration_ms": round((time.perf_counter() - started) * 1000, 2)}
        return ServiceResult(
            ok=outcome.ok,
            op=step.name,
            data=outcome.resources(),
            error=outcome.error,
            meta=meta,
        )

    async def _attempt(self, step: PipelineStep, emit: Emit) -> StepOutcome:
        logger.debug(
            "Step %s starting (source=%s, target=%s)", step.name, step.source, step.target
        )
        try:
            counts = await self._execute(step, emit)
        except PipelineError as exc:
            logger.debug("Step %s failed: %s", step.name, exc.code)
            return StepOutcome(
                step=step,
                ok=False,
                error=ServiceError.from_exception(exc, step=step.name),
            )
        logger.debug("Step %s finished: %s", step.name, counts)
        return StepOutcome(step=step, ok=True, counts=counts)

    async def _execute(self, step: PipelineStep, emit: Emit) -> dict[str, int]:
        settings = self._settings
        errors = settings.pipeline.decode_errors

        if step.name == "print":
            chars = await read_whole_and_print(settings.resolve(step.source), emit, errors=errors)
            return {"chars": chars}
        if step.name == "lines":
            lines = await read_lines_and_print(settings.resolve(step.source), emit, errors=errors)
            return {"lines": lines}

        assert step.target is not None
        target = settings.resolve(step.target)
        if step.name == "copy":
            chars = await copy_whole_appending(
                settings.resolve(step.source), target, errors=errors
            )
            return {"chars": chars}
        size = await fetch_and_append(
            step.source,
            target,
            timeout=settings.http.timeout,
            follow_redirects=settings.http.follow_redirects,
            errors=errors,
            transport=self._transport,
        )
        return {"bytes": size}
