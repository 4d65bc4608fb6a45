"""Executors that run puzzle generation inline or on a worker thread."""

from __future__ import annotations

import random
import threading
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from typing import Optional, Protocol

from sudoku_engine.errors import (
    GenerationBudgetExhausted,
    GenerationCancelled,
    GenerationInvariantViolation,
    describe,
)
from sudoku_engine.tiers import Tier

from . import log
from .pipeline import generate_puzzle
from .task import (
    STATUS_CANCELLED,
    STATUS_EXHAUSTED,
    STATUS_FAILED,
    STATUS_OK,
    GenerationResult,
    GenerationTask,
)


def execute(task: GenerationTask, cancel: Optional[threading.Event] = None) -> GenerationResult:
    """Run ``task`` to completion on the calling thread.

    Cancellation and strict-mode exhaustion are reported on the result. An
    invariant violation is logged and re-raised: it signals an engine
    defect, not a condition the caller can act on.
    """

    result = GenerationResult(task=task)
    t0 = time.perf_counter()
    try:
        result.puzzle = generate_puzzle(
            task.tier,
            random.Random(task.seed),
            max_attempts=task.max_attempts,
            strict=task.strict,
            cancel=cancel,
        )
        result.status = STATUS_EXHAUSTED if result.puzzle.exhausted else STATUS_OK
        result.metrics["attempts"] = result.puzzle.attempts
        result.metrics["removed"] = result.puzzle.removed
    except GenerationCancelled as exc:
        result.status = STATUS_CANCELLED
        result.error = describe(exc)
        log.append_event({"event": "generation.cancelled", "tier": Tier.parse(task.tier).value})
    except GenerationBudgetExhausted as exc:
        result.status = STATUS_EXHAUSTED
        result.error = describe(exc)
        result.metrics["attempts"] = exc.result.attempts
        result.metrics["removed"] = exc.result.removed
    except GenerationInvariantViolation as exc:
        result.status = STATUS_FAILED
        result.error = describe(exc)
        log.append_event({"event": "generation.failed", **result.error})
        raise
    finally:
        result.metrics["time_ms"] = int((time.perf_counter() - t0) * 1000)
    return result


class GenerationHandle:
    """Handle on a submitted task; the result is delivered in one piece."""

    def __init__(self, task: GenerationTask, future: "Future[GenerationResult]", cancel: threading.Event) -> None:
        self.task = task
        self._future = future
        self._cancel = cancel

    def cancel(self) -> None:
        """Ask the run to stop; anything carved so far is discarded."""
        self._cancel.set()
        self._future.cancel()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> GenerationResult:
        try:
            return self._future.result(timeout)
        except CancelledError:
            return GenerationResult(
                task=self.task,
                status=STATUS_CANCELLED,
                error={"code": "cancelled", "detail": "cancelled before start"},
            )


class Executor(Protocol):
    """Abstract execution backend."""

    def submit(self, task: GenerationTask) -> GenerationHandle:
        """Schedule ``task`` for execution."""

    def shutdown(self) -> None:
        """Tear down resources allocated by the executor."""


class SequentialExecutor:
    """Runs each task immediately on the submitting thread."""

    def submit(self, task: GenerationTask) -> GenerationHandle:
        cancel = threading.Event()
        future: Future[GenerationResult] = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(execute(task, cancel))
        except GenerationInvariantViolation as exc:
            future.set_exception(exc)
        return GenerationHandle(task, future, cancel)

    def shutdown(self) -> None:
        return None


class ThreadedExecutor:
    """Runs tasks on a single background worker, off the interactive thread."""

    def __init__(self, max_workers: int = 1) -> None:
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="sudoku-gen")

    def submit(self, task: GenerationTask) -> GenerationHandle:
        cancel = threading.Event()
        future = self._pool.submit(execute, task, cancel)
        return GenerationHandle(task, future, cancel)

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "ThreadedExecutor":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()


__all__ = [
    "Executor",
    "GenerationHandle",
    "SequentialExecutor",
    "ThreadedExecutor",
    "execute",
]
