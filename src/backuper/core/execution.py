"""Task execution with failure isolation.

``run_task`` is the only place errors of external operations are caught:
a failing task becomes a ``TaskResult`` with an error message and the run
moves on to the next task.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from ..__util__ import pretty_duration

logger = logging.getLogger(__name__)


class Task(NamedTuple):
    """A named, independently failable unit of work."""

    name: str
    func: Callable[[], object]


@dataclass(frozen=True)
class TaskResult:
    """Outcome of a single task."""

    name: str
    duration: float
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """``[<name> in <duration>] <error>`` for failed tasks."""
        if self.error is None:
            return ""
        return f"[{self.name} in {pretty_duration(self.duration)}] {self.error}"


@dataclass(frozen=True)
class RunReport:
    """Results of all tasks of one run, in execution order."""

    results: tuple[TaskResult, ...] = ()
    started_at: float = field(default_factory=time.monotonic)
    completed_at: float = 0.0

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(r.message for r in self.results if not r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def duration(self) -> float:
        if self.completed_at:
            return self.completed_at - self.started_at
        return time.monotonic() - self.started_at


def run_task(name: str, func: Callable[[], object]) -> TaskResult:
    """Run ``func`` once, timing it and capturing any failure."""
    logger.info("Starting task: %s", name)

    start = time.monotonic()
    try:
        func()
    except Exception as e:  # pylint: disable=broad-except
        duration = time.monotonic() - start
        logger.error("Task failed in %s: %s", pretty_duration(duration), name)
        logger.debug("Task %s raised", name, exc_info=True)
        return TaskResult(name, duration, str(e) or type(e).__name__)

    duration = time.monotonic() - start
    logger.info("Task succeeded in %s: %s", pretty_duration(duration), name)
    return TaskResult(name, duration)


def execute_tasks(tasks: Iterable[Task]) -> RunReport:
    """Run tasks one after another; a failure never stops later tasks."""
    started_at = time.monotonic()
    results = tuple(run_task(task.name, task.func) for task in tasks)
    return RunReport(results=results, started_at=started_at, completed_at=time.monotonic())
