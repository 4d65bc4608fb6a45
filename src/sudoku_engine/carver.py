"""Puzzle carver: clear cells of a solved grid while the puzzle stays unique."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .checker import is_solved
from .errors import GenerationBudgetExhausted, GenerationCancelled
from .grid import EMPTY, SIZE, ClueMask, Grid, grid_copy, validate_shape
from .oracle import is_unique


@dataclass(frozen=True)
class CarveResult:
    """Outcome of a carve.

    ``exhausted`` is set when the candidate pool or the attempt budget ran
    out before ``target`` cells were cleared; ``puzzle`` is then the
    best-effort puzzle with ``removed`` empty cells.
    """

    puzzle: Grid
    clue_mask: ClueMask
    target: int
    removed: int
    attempts: int
    exhausted: bool

    @property
    def clue_count(self) -> int:
        return sum(1 for row in self.clue_mask for is_clue in row if is_clue)


def clue_mask_of(puzzle: Grid) -> ClueMask:
    return [[puzzle[r][c] != EMPTY for c in range(SIZE)] for r in range(SIZE)]


def carve(
    solution: Grid,
    target_removals: int,
    rng: Optional[random.Random] = None,
    *,
    max_attempts: Optional[int] = None,
    strict: bool = False,
    cancel: Optional[threading.Event] = None,
) -> CarveResult:
    """Clear ``target_removals`` cells of ``solution`` keeping a unique completion.

    Cells are drawn uniformly at random from those not yet tried. A rejected
    cell is never retried: clearing more cells can only add completions, so
    a removal that broke uniqueness once would break it again. The pool
    therefore bounds the work to at most 81 oracle calls; ``max_attempts``
    tightens that bound further. On exhaustion the best-effort puzzle is
    returned, or :class:`GenerationBudgetExhausted` is raised when
    ``strict`` is set.
    """
    validate_shape(solution)
    if not is_solved(solution):
        raise ValueError("carve expects a completely solved grid")
    if not 0 <= target_removals <= SIZE * SIZE:
        raise ValueError(f"target_removals must be within 0..81, got {target_removals}")
    if max_attempts is not None and max_attempts < 0:
        raise ValueError("max_attempts must not be negative")
    if rng is None:
        rng = random.Random()

    puzzle = grid_copy(solution)
    pool: List[Tuple[int, int]] = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    removed = 0
    attempts = 0
    exhausted = False

    while removed < target_removals:
        if not pool or (max_attempts is not None and attempts >= max_attempts):
            exhausted = True
            break
        if cancel is not None and cancel.is_set():
            raise GenerationCancelled("carve abandoned")

        idx = rng.randrange(len(pool))
        pool[idx], pool[-1] = pool[-1], pool[idx]
        r, c = pool.pop()

        backup = puzzle[r][c]
        puzzle[r][c] = EMPTY
        attempts += 1
        if is_unique(puzzle, cancel):
            removed += 1
        else:
            puzzle[r][c] = backup

    result = CarveResult(
        puzzle=puzzle,
        clue_mask=clue_mask_of(puzzle),
        target=target_removals,
        removed=removed,
        attempts=attempts,
        exhausted=exhausted,
    )
    if exhausted and strict:
        raise GenerationBudgetExhausted(result)
    return result


__all__ = ["CarveResult", "carve", "clue_mask_of"]
