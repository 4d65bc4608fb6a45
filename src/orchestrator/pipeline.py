"""Top-level generation: full solution, then carving, for one difficulty tier."""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass
from typing import Optional

from project_config import get_section
from sudoku_engine.carver import carve
from sudoku_engine.errors import GenerationBudgetExhausted
from sudoku_engine.generator import generate_solution
from sudoku_engine.grid import ClueMask, Grid, to_string
from sudoku_engine.tiers import Tier, removal_target

from . import log


@dataclass(frozen=True)
class GeneratedPuzzle:
    """A freshly carved puzzle together with the solution it came from."""

    puzzle: Grid
    clue_mask: ClueMask
    solution: Grid
    tier: Tier
    target: int
    removed: int
    attempts: int
    exhausted: bool


def _carve_settings(max_attempts: Optional[int], strict: Optional[bool]) -> tuple[Optional[int], bool]:
    section = get_section("generator.carve", {})
    if max_attempts is None:
        configured = int(section.get("max_attempts", 0))
        max_attempts = configured if configured > 0 else None
    if strict is None:
        strict = bool(section.get("strict", False))
    return max_attempts, strict


def generate_puzzle(
    tier,
    rng: Optional[random.Random] = None,
    *,
    seed=None,
    max_attempts: Optional[int] = None,
    strict: Optional[bool] = None,
    cancel: Optional[threading.Event] = None,
) -> GeneratedPuzzle:
    """Generate a uniquely solvable puzzle for ``tier``.

    ``rng`` (or ``seed``) drives every random choice, so equal seeds give
    equal puzzles. Exhaustion of the carve budget is logged and reported on
    the result; with ``strict`` it raises instead.
    """
    tier = Tier.parse(tier)
    if rng is None:
        rng = random.Random(seed)
    max_attempts, strict = _carve_settings(max_attempts, strict)
    target = removal_target(tier)

    t0 = time.perf_counter()
    solution = generate_solution(rng, cancel=cancel)
    try:
        result = carve(
            solution,
            target,
            rng,
            max_attempts=max_attempts,
            strict=strict,
            cancel=cancel,
        )
    except GenerationBudgetExhausted as exc:
        log.append_event(_event("generation.exhausted", tier, exc.result, t0, strict=True))
        raise

    name = "generation.exhausted" if result.exhausted else "generation.complete"
    log.append_event(_event(name, tier, result, t0, strict=strict))

    return GeneratedPuzzle(
        puzzle=result.puzzle,
        clue_mask=result.clue_mask,
        solution=solution,
        tier=tier,
        target=result.target,
        removed=result.removed,
        attempts=result.attempts,
        exhausted=result.exhausted,
    )


def _event(name: str, tier: Tier, result, t0: float, *, strict: bool) -> dict:
    return {
        "event": name,
        "tier": tier.value,
        "target": result.target,
        "removed": result.removed,
        "attempts": result.attempts,
        "strict": strict,
        "puzzle": to_string(result.puzzle),
        "time_ms": int((time.perf_counter() - t0) * 1000),
    }


__all__ = ["GeneratedPuzzle", "generate_puzzle"]
