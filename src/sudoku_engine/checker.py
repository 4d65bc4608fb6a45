"""Constraint checks shared by the solver, carver and play sessions.

``is_legal`` is the only place that scans rows, columns and blocks; every
other helper in the package is built from it.
"""

from __future__ import annotations

from typing import List

from .grid import BOX, DIGITS, EMPTY, SIZE, Grid, block_origin


def is_legal(grid: Grid, row: int, col: int, value: int) -> bool:
    """Return ``True`` when ``value`` does not already occur in the row, column or block."""

    for x in range(SIZE):
        if grid[row][x] == value:
            return False

    for x in range(SIZE):
        if grid[x][col] == value:
            return False

    start_row, start_col = block_origin(row, col)
    for i in range(BOX):
        for j in range(BOX):
            if grid[start_row + i][start_col + j] == value:
                return False

    return True


def candidates(grid: Grid, row: int, col: int) -> List[int]:
    """Digits that may legally be placed in an empty cell (``[]`` for a filled one)."""

    if grid[row][col] != EMPTY:
        return []
    return [d for d in DIGITS if is_legal(grid, row, col, d)]


def is_consistent(grid: Grid) -> bool:
    """Return ``True`` when no row, column or block repeats a non-empty digit.

    Each filled cell is lifted out, checked against the rest, and put back;
    the grid is unchanged on return.
    """

    for r in range(SIZE):
        for c in range(SIZE):
            v = grid[r][c]
            if v == EMPTY:
                continue
            grid[r][c] = EMPTY
            try:
                legal = is_legal(grid, r, c, v)
            finally:
                grid[r][c] = v
            if not legal:
                return False
    return True


def is_solved(grid: Grid) -> bool:
    if any(grid[r][c] == EMPTY for r in range(SIZE) for c in range(SIZE)):
        return False
    return is_consistent(grid)


__all__ = ["candidates", "is_consistent", "is_legal", "is_solved"]
