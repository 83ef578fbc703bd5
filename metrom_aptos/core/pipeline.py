"""
Sequential step runner used by the deployment workflows.

A pipeline runs its steps in order and stops at the first failure. Every step
turns into a StepResult, so callers branch on data instead of on exits, and
nothing that already ran is undone when a later step fails.
"""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Union

from ..errors import StepFailed
from .progress import ProgressReporter

logger = logging.getLogger(__name__)

StepAction = Callable[[Callable[[str], None]], Union[str, Awaitable[str]]]


@dataclass
class Step:
    """
    One unit of work.

    action receives an ``update(text)`` callback for intermediate progress and
    returns the success message. A StepFailed it raises is reported verbatim;
    any other exception is reported as ``"<failure_prefix>: <error>"``.
    """

    name: str
    title: str
    action: StepAction
    failure_prefix: str = "Step failed"


@dataclass(frozen=True)
class StepResult:
    name: str
    ok: bool
    message: str
    error: Optional[BaseException] = None


@dataclass
class PipelineResult:
    steps: List[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(step.ok for step in self.steps)

    @property
    def failed_step(self) -> Optional[StepResult]:
        return next((step for step in self.steps if not step.ok), None)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def names(self) -> List[str]:
        return [step.name for step in self.steps]


class Pipeline:
    def __init__(self, reporter: ProgressReporter):
        self.reporter = reporter

    async def run_step(self, step: Step) -> StepResult:
        self.reporter.start(step.name, step.title)

        def update(text: str) -> None:
            self.reporter.update(step.name, text)

        try:
            outcome: Any = step.action(update)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except StepFailed as e:
            self.reporter.fail(step.name, str(e))
            return StepResult(step.name, False, str(e), e)
        except Exception as e:
            message = f"{step.failure_prefix}: {e}"
            logger.debug(f"Step {step.name} raised", exc_info=True)
            self.reporter.fail(step.name, message)
            return StepResult(step.name, False, message, e)

        message = outcome or step.title
        self.reporter.succeed(step.name, message)
        return StepResult(step.name, True, message)

    async def run(self, steps: List[Step]) -> PipelineResult:
        result = PipelineResult()
        for step in steps:
            step_result = await self.run_step(step)
            result.steps.append(step_result)
            if not step_result.ok:
                break
        return result
