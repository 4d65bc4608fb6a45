"""Sudoku puzzle engine: constraint checks, solver, uniqueness oracle, generator and carver."""

from __future__ import annotations

from .carver import CarveResult, carve
from .checker import candidates, is_consistent, is_legal, is_solved
from .errors import (
    GenerationBudgetExhausted,
    GenerationCancelled,
    GenerationInvariantViolation,
    IllegalEdit,
    SudokuError,
)
from .generator import generate_solution
from .grid import EMPTY, Grid, from_string, grid_copy, print_grid, to_string
from .oracle import is_unique
from .solver import count_solutions, solve, solved_copy
from .tiers import Tier, removal_target

__all__ = [
    "CarveResult",
    "EMPTY",
    "GenerationBudgetExhausted",
    "GenerationCancelled",
    "GenerationInvariantViolation",
    "Grid",
    "IllegalEdit",
    "SudokuError",
    "Tier",
    "candidates",
    "carve",
    "count_solutions",
    "from_string",
    "generate_solution",
    "grid_copy",
    "is_consistent",
    "is_legal",
    "is_solved",
    "is_unique",
    "print_grid",
    "removal_target",
    "solve",
    "solved_copy",
    "to_string",
]
