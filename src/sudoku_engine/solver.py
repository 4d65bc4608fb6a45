"""Exhaustive backtracking solver.

Cells are visited in row-major order and digits are tried in ascending
order, so the completion found for a given partial grid is always the same.
"""

from __future__ import annotations

import threading
from typing import List, Optional, Tuple

from .checker import is_consistent, is_legal
from .errors import GenerationCancelled
from .grid import DIGITS, EMPTY, SIZE, Grid, grid_copy, validate_shape


def first_empty_cell(grid: Grid) -> Optional[Tuple[int, int]]:
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] == EMPTY:
                return (r, c)
    return None


def _check_cancel(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise GenerationCancelled("search abandoned")


def _fill(grid: Grid, cancel: Optional[threading.Event]) -> bool:
    _check_cancel(cancel)
    cell = first_empty_cell(grid)
    if cell is None:
        return True

    row, col = cell
    for num in DIGITS:
        if not is_legal(grid, row, col, num):
            continue
        grid[row][col] = num
        if _fill(grid, cancel):
            return True
        grid[row][col] = EMPTY
    return False


def solve(grid: Grid, cancel: Optional[threading.Event] = None) -> bool:
    """Complete ``grid`` in place.

    Returns ``True`` with the grid filled, or ``False`` with the grid left
    exactly as it was when no completion exists (including grids whose
    givens already conflict).
    """
    validate_shape(grid)
    if not is_consistent(grid):
        return False

    backup = grid_copy(grid)
    try:
        return _fill(grid, cancel)
    except GenerationCancelled:
        for r in range(SIZE):
            grid[r][:] = backup[r]
        raise


def solved_copy(grid: Grid, cancel: Optional[threading.Event] = None) -> Optional[Grid]:
    """Return a completed copy of ``grid`` or ``None`` if it has no completion."""
    work = grid_copy(grid)
    if solve(work, cancel):
        return work
    return None


def _count(grid: Grid, counter: List[int], limit: int, cancel: Optional[threading.Event]) -> bool:
    """Depth-first count; returns ``True`` once ``limit`` completions were seen."""
    _check_cancel(cancel)
    cell = first_empty_cell(grid)
    if cell is None:
        counter[0] += 1
        return counter[0] >= limit

    row, col = cell
    for num in DIGITS:
        if not is_legal(grid, row, col, num):
            continue
        grid[row][col] = num
        stop = _count(grid, counter, limit, cancel)
        grid[row][col] = EMPTY
        if stop:
            return True
    return False


def count_solutions(grid: Grid, limit: int = 2, cancel: Optional[threading.Event] = None) -> int:
    """Count completions of ``grid`` up to ``limit``. The input is not modified."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    validate_shape(grid)
    if not is_consistent(grid):
        return 0
    counter = [0]
    _count(grid_copy(grid), counter, limit, cancel)
    return counter[0]


__all__ = ["count_solutions", "first_empty_cell", "solve", "solved_copy"]
