"""Ordered step runner for project creation.

Every side effect of ``nestify new`` (directory creation, file generation,
dependency install, Prisma bootstrap, auth scaffolding, formatting, git) is a
named ``PipelineStep`` with its own failure policy:

* ``FATAL`` -- a failure stops the run; later steps stay ``pending``.
* ``WARN``  -- a failure is printed as a warning and the run continues.

Steps whose guard is false are ``skipped``.  The pipeline is the only place
that catches errors raised by generators and services, and the only place
that turns them into user-facing text.
"""

from __future__ import annotations

import inspect
import time
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from .errors import InstallError, NestifyError
from .utils import (
    console,
    create_progress,
    format_duration,
    print_error,
    print_summary_table,
    print_warning,
)


class StepPolicy(str, Enum):
    FATAL = "fatal"
    WARN = "warn"


class StepStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class Outcome(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class PipelineStep:
    """One named side effect.

    Attributes:
        name: Label shown in the spinner, warnings and the summary table.
        action: Zero-argument callable; may return an awaitable.
        policy: What a failure means for the rest of the run.
        guard: Evaluated when the step is reached; ``False`` skips it.
        skip_warning: Printed when the guard skips the step.  A warned skip
            makes the outcome partial.
    """

    name: str
    action: Callable[[], Any]
    policy: StepPolicy = StepPolicy.FATAL
    guard: Optional[Callable[[], bool]] = None
    skip_warning: Optional[str] = None
    status: StepStatus = StepStatus.PENDING
    error: Optional[BaseException] = None
    result: Any = None
    duration: float = 0.0


@dataclass
class PipelineResult:
    steps: list[PipelineStep] = field(default_factory=list)
    outcome: Outcome = Outcome.SUCCESS
    duration: float = 0.0

    @property
    def exit_code(self) -> int:
        return 1 if self.outcome is Outcome.FAILED else 0

    @property
    def failed_step(self) -> Optional[PipelineStep]:
        for step in self.steps:
            if step.status is StepStatus.FAILED and step.policy is StepPolicy.FATAL:
                return step
        return None

    def status_of(self, name: str) -> StepStatus:
        for step in self.steps:
            if step.name == name:
                return step.status
        raise KeyError(name)


class Pipeline:
    """Runs ``PipelineStep``s strictly in order, one at a time."""

    def __init__(self, steps: Optional[list[PipelineStep]] = None, show_summary: bool = True) -> None:
        self.steps: list[PipelineStep] = list(steps or [])
        self.show_summary = show_summary

    def add(
        self,
        name: str,
        action: Callable[[], Any],
        policy: StepPolicy = StepPolicy.FATAL,
        guard: Optional[Callable[[], bool]] = None,
        skip_warning: Optional[str] = None,
    ) -> PipelineStep:
        step = PipelineStep(name=name, action=action, policy=policy, guard=guard, skip_warning=skip_warning)
        self.steps.append(step)
        return step

    async def _execute(self, step: PipelineStep) -> None:
        step.status = StepStatus.RUNNING
        start = time.monotonic()
        try:
            with create_progress() as progress:
                progress.add_task(f"{step.name}...", total=None)
                result = step.action()
                if inspect.isawaitable(result):
                    result = await result
            step.result = result
            step.status = StepStatus.SUCCEEDED
        except Exception as exc:
            step.error = exc
            step.status = StepStatus.FAILED
        finally:
            step.duration = time.monotonic() - start

    async def run(self) -> PipelineResult:
        """Execute every step and classify the run.

        Returns:
            ``PipelineResult`` whose outcome is ``FAILED`` after a fatal
            failure, ``PARTIAL`` after a warned failure or warned skip, and
            ``SUCCESS`` otherwise.
        """
        run_start = time.monotonic()
        result = PipelineResult(steps=self.steps)
        degraded = False

        for step in self.steps:
            if step.guard is not None and not step.guard():
                step.status = StepStatus.SKIPPED
                if step.skip_warning:
                    print_warning(step.skip_warning)
                    degraded = True
                continue

            await self._execute(step)

            if step.status is StepStatus.SUCCEEDED:
                console.print(f"[green]+[/green] {step.name} [dim]({format_duration(step.duration)})[/dim]")
                continue

            if step.policy is StepPolicy.WARN:
                degraded = True
                print_warning(f"{step.name} failed: {step.error}")
                continue

            result.outcome = Outcome.FAILED
            report_failure(step)
            break
        else:
            result.outcome = Outcome.PARTIAL if degraded else Outcome.SUCCESS

        result.duration = time.monotonic() - run_start
        if self.show_summary:
            print_summary_table(
                {step.name: _status_label(step) for step in self.steps},
                title=f"nestify ({format_duration(result.duration)})",
            )
        return result


def _status_label(step: PipelineStep) -> str:
    if step.status in (StepStatus.SUCCEEDED, StepStatus.FAILED):
        return f"{step.status.value} in {format_duration(step.duration)}"
    return step.status.value


def report_failure(step: PipelineStep) -> None:
    """Print what failed, the underlying error text and any recovery commands."""
    error = step.error
    print_error(f"{step.name} failed.")
    console.print(str(error), markup=False, highlight=False)

    if isinstance(error, InstallError):
        console.print("\nThe project files are in place. Install dependencies manually:")
        for index, command in enumerate(error.recovery_commands, start=1):
            console.print(f"  {index}. {command}", markup=False, highlight=False)
    elif error is not None and not isinstance(error, NestifyError):
        formatted = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        console.print(formatted, style="dim", markup=False, highlight=False)
