from __future__ import annotations

import pytest

from _grids import PUZZLE, puzzle_grid
from sudoku_engine.grid import from_string, print_grid, to_string


def test_from_string_accepts_dots_and_whitespace() -> None:
    dotted = PUZZLE.replace("0", ".")
    rows = "\n".join(dotted[i:i + 9] for i in range(0, 81, 9))
    assert from_string(rows) == puzzle_grid()
    assert to_string(from_string(rows)) == PUZZLE


@pytest.mark.parametrize(
    "text",
    [
        PUZZLE[:-1],
        PUZZLE + "0",
        "x" + PUZZLE[1:],
        "٣" + PUZZLE[1:],  # Arabic-Indic digit three
        "５" + PUZZLE[1:],  # fullwidth digit five
    ],
)
def test_from_string_rejects_bad_input(text) -> None:
    with pytest.raises(ValueError):
        from_string(text)


def test_print_grid_marks_empty_cells() -> None:
    lines = print_grid(puzzle_grid()).splitlines()
    assert len(lines) == 13
    assert lines[1] == "| 5 3 . | . 7 . | . . . |"
