"""Full-solution generator: random diagonal blocks, completed by the solver."""

from __future__ import annotations

import random
import threading
from typing import Optional

from .errors import GenerationInvariantViolation
from .grid import BOX, DIGITS, SIZE, Grid, empty_grid, to_string
from .solver import solve

# Blocks (0,0), (3,3) and (6,6) share no row, column or block.
DIAGONAL_ORIGINS = tuple(range(0, SIZE, BOX))


def fill_block(grid: Grid, row: int, col: int, rng: random.Random) -> None:
    numbers = list(DIGITS)
    rng.shuffle(numbers)
    index = 0
    for i in range(BOX):
        for j in range(BOX):
            grid[row + i][col + j] = numbers[index]
            index += 1


def generate_solution(
    rng: Optional[random.Random] = None,
    *,
    seed=None,
    cancel: Optional[threading.Event] = None,
) -> Grid:
    """Return a fully solved grid.

    Only the diagonal blocks are randomised; the rest is filled by the
    deterministic solver, so the result is a pure function of the RNG state.
    """
    if rng is None:
        rng = random.Random(seed)

    grid = empty_grid()
    for origin in DIAGONAL_ORIGINS:
        fill_block(grid, origin, origin, rng)

    if not solve(grid, cancel):
        raise GenerationInvariantViolation(
            f"solver could not complete diagonal seed {to_string(grid)}"
        )
    return grid


__all__ = ["DIAGONAL_ORIGINS", "fill_block", "generate_solution"]
