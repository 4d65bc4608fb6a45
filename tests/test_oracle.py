from __future__ import annotations

from _grids import puzzle_grid, solved_grid
from sudoku_engine.grid import empty_grid
from sudoku_engine.oracle import is_unique


def test_complete_grid_is_trivially_unique() -> None:
    assert is_unique(solved_grid()) is True


def test_single_empty_cell_is_unique() -> None:
    for r, c in ((0, 0), (4, 4), (8, 8), (2, 7)):
        grid = solved_grid()
        grid[r][c] = 0
        assert is_unique(grid) is True


def test_one_empty_cell_per_row_is_unique() -> None:
    grid = solved_grid()
    for r in range(9):
        grid[r][(r * 4) % 9] = 0
    assert is_unique(grid) is True


def test_known_puzzle_is_unique() -> None:
    assert is_unique(puzzle_grid()) is True


def test_underconstrained_grids_are_not_unique() -> None:
    assert is_unique(empty_grid()) is False
    grid = empty_grid()
    grid[0] = [5, 3, 4, 6, 7, 8, 9, 1, 2]
    assert is_unique(grid) is False


def test_grid_without_completion_is_not_unique() -> None:
    grid = puzzle_grid()
    grid[0][2] = 1
    assert is_unique(grid) is False


def test_oracle_does_not_modify_input() -> None:
    grid = puzzle_grid()
    is_unique(grid)
    assert grid == puzzle_grid()
