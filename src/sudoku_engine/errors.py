"""Error types raised by the puzzle engine and play sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .carver import CarveResult


class SudokuError(RuntimeError):
    """Base class for engine errors; carries a short machine-readable code."""

    code = "sudoku-error"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        message = self.code if detail is None else f"{self.code}:{detail}"
        super().__init__(message)


class IllegalEdit(SudokuError):
    """Attempt to overwrite a fixed clue cell. No state is changed."""

    code = "illegal-edit"

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        super().__init__(f"cell ({row}, {col}) is a clue")


class GenerationInvariantViolation(SudokuError):
    """The solver could not complete a diagonally seeded grid.

    The three diagonal blocks never constrain each other, so this indicates
    a defect in the engine rather than bad luck with the random seed.
    """

    code = "generation-invariant"


class GenerationBudgetExhausted(SudokuError):
    """The carver ran out of removable cells before reaching its target."""

    code = "budget-exhausted"

    def __init__(self, result: "CarveResult") -> None:
        self.result = result
        super().__init__(f"removed {result.removed} of {result.target} cells")


class GenerationCancelled(SudokuError):
    """An in-flight generation was abandoned by its caller."""

    code = "cancelled"


def describe(exc: BaseException) -> dict[str, Any]:
    """Return a JSON-friendly summary of ``exc`` for event logs."""

    code = getattr(exc, "code", type(exc).__name__)
    return {"code": code, "detail": getattr(exc, "detail", None) or str(exc)}


__all__ = [
    "GenerationBudgetExhausted",
    "GenerationCancelled",
    "GenerationInvariantViolation",
    "IllegalEdit",
    "SudokuError",
    "describe",
]
