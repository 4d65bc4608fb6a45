"""Work unit definitions for background puzzle generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, MutableMapping, Optional, Union

from sudoku_engine.tiers import Tier

from .pipeline import GeneratedPuzzle

STATUS_PENDING = "pending"
STATUS_OK = "ok"
STATUS_EXHAUSTED = "exhausted"
STATUS_CANCELLED = "cancelled"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class GenerationTask:
    """Parameters for one puzzle generation run.

    ``max_attempts`` and ``strict`` fall back to the ``generator.carve``
    configuration when left as ``None``.
    """

    tier: Union[Tier, str]
    seed: Optional[Union[int, str]] = None
    max_attempts: Optional[int] = None
    strict: Optional[bool] = None


@dataclass
class GenerationResult:
    """Container for executor results.

    ``puzzle`` is only set once generation has finished; a cancelled or
    failed run never exposes a partially carved grid.
    """

    task: GenerationTask
    status: str = STATUS_PENDING
    puzzle: Optional[GeneratedPuzzle] = None
    error: Optional[MutableMapping[str, Any]] = None
    metrics: MutableMapping[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.puzzle is not None


__all__ = [
    "GenerationResult",
    "GenerationTask",
    "STATUS_CANCELLED",
    "STATUS_EXHAUSTED",
    "STATUS_FAILED",
    "STATUS_OK",
    "STATUS_PENDING",
]
