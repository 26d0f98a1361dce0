"""Typed pipeline stages with parallel fan-out support."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from aigc_check.constants import StageOutcome

logger = logging.getLogger(__name__)

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


@dataclass
class StageResult(Generic[TOutput]):
    """Outcome of a single pipeline stage execution."""

    stage_name: str
    output: TOutput | None
    duration_ms: float
    status: StageOutcome
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == StageOutcome.COMPLETED


@dataclass
class PipelineStage(Generic[TInput, TOutput]):
    """A named, typed, async pipeline stage with error isolation."""

    name: str
    execute: Callable[[TInput], Awaitable[TOutput]]
    timeout: float | None = None  # seconds; None = no timeout

    async def run(
        self, input_data: TInput
    ) -> StageResult[TOutput]:
        """Execute the stage, capturing timing and errors."""
        start = time.monotonic()
        try:
            if self.timeout is not None:
                output = await asyncio.wait_for(
                    self.execute(input_data), timeout=self.timeout
                )
            else:
                output = await self.execute(input_data)
            elapsed = (time.monotonic() - start) * 1000
            return StageResult(
                stage_name=self.name,
                output=output,
                duration_ms=elapsed,
                status=StageOutcome.COMPLETED,
            )
        except Exception as exc:
            elapsed = (time.monotonic() - start) * 1000
            logger.warning(
                "event=stage_failed stage=%s error=%s",
                self.name,
                exc or type(exc).__name__,
            )
            return StageResult(
                stage_name=self.name,
                output=None,
                duration_ms=elapsed,
                status=StageOutcome.FAILED,
                error=str(exc) or type(exc).__name__,
            )


def sync_stage(
    name: str, func: Callable[[TInput], TOutput]
) -> PipelineStage[TInput, TOutput]:
    """Wrap a blocking callable so it runs on a worker thread."""

    async def _execute(input_data: TInput) -> TOutput:
        return await asyncio.to_thread(func, input_data)

    return PipelineStage(name=name, execute=_execute)


@dataclass
class ParallelGroup(Generic[TInput]):
    """Run multiple stages concurrently on the same input."""

    name: str
    stages: list[PipelineStage[TInput, Any]] = field(
        default_factory=lambda: list[PipelineStage[Any, Any]]()
    )
    max_concurrency: int | None = None

    async def execute(
        self, input_data: TInput
    ) -> list[StageResult[Any]]:
        """Run all stages concurrently with optional semaphore.

        Every stage runs to completion or failure independently and
        results come back in stage order. Failed stages do not cancel
        siblings.
        """
        if not self.stages:
            return []

        semaphore = (
            asyncio.Semaphore(self.max_concurrency)
            if self.max_concurrency
            else None
        )

        async def _run_stage(
            stage: PipelineStage[TInput, Any],
        ) -> StageResult[Any]:
            if semaphore:
                async with semaphore:
                    return await stage.run(input_data)
            return await stage.run(input_data)

        results = await asyncio.gather(
            *(_run_stage(stage) for stage in self.stages)
        )
        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.info(
                "event=parallel_group_done group=%s stages=%d failed=%d",
                self.name,
                len(results),
                failed,
            )
        return list(results)
