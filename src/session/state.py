"""Play session: working grid, immutable clues and the hidden solution."""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from contracts import ContractError, parse_bundle
from orchestrator import log
from orchestrator.pipeline import GeneratedPuzzle, generate_puzzle
from project_config import get_section
from sudoku_engine.carver import clue_mask_of
from sudoku_engine.checker import candidates as legal_candidates
from sudoku_engine.checker import is_legal, is_solved
from sudoku_engine.grid import DIGITS, EMPTY, SIZE, ClueMask, Grid, count_filled, empty_cells, grid_copy, to_string
from sudoku_engine.errors import IllegalEdit
from sudoku_engine.solver import count_solutions, solved_copy

from .history import Edit, MoveHistory

_DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class PuzzleView:
    """What the host gets to see of a puzzle; the solution is withheld."""

    working_grid: Grid
    clue_mask: ClueMask
    tier: str
    removed: int
    exhausted: bool


@dataclass(frozen=True)
class Hint:
    row: int
    col: int
    value: int


@dataclass(frozen=True)
class MoveResult:
    """Outcome of :meth:`Session.apply_move`.

    ``legal`` says whether the value clashes with another digit in its row,
    column or block; ``matches_solution`` compares it with the hidden
    solution. Both are ``None`` for an erase.
    """

    row: int
    col: int
    value: int
    previous: int
    legal: Optional[bool]
    matches_solution: Optional[bool]


def _empty_notes() -> List[List[Set[int]]]:
    return [[set() for _ in range(SIZE)] for _ in range(SIZE)]


def _check_cell(row: int, col: int) -> None:
    for name, idx in (("row", row), ("col", col)):
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise TypeError(f"{name} must be an int")
        if not 0 <= idx < SIZE:
            raise ValueError(f"{name} must be within 0..8, got {idx}")


def _check_value(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("value must be an int")
    if not EMPTY <= value <= SIZE:
        raise ValueError(f"value must be within 0..9, got {value}")


class Session:
    """Owns one puzzle attempt.

    All operations take a per-session lock, so a hint or completion check
    never observes a half-applied move. A new puzzle replaces the previous
    one wholesale.
    """

    def __init__(self, rng: Optional[random.Random] = None, *, history_limit: Optional[int] = None) -> None:
        if history_limit is None:
            history_limit = int(get_section("session.history_limit", _DEFAULT_HISTORY_LIMIT))
        self._lock = threading.RLock()
        self._rng = rng or random.Random()
        self._history = MoveHistory(history_limit)
        self._puzzle: Optional[Grid] = None
        self._clues: Optional[ClueMask] = None
        self._solution: Optional[Grid] = None
        self._working: Optional[Grid] = None
        self._notes: List[List[Set[int]]] = _empty_notes()
        self._meta: Dict[str, Any] = {}

    # ---------- puzzle lifecycle ----------

    def new_puzzle(
        self,
        tier,
        *,
        seed=None,
        max_attempts: Optional[int] = None,
        strict: Optional[bool] = None,
    ) -> PuzzleView:
        """Generate a puzzle for ``tier`` and make it the active one."""

        rng = random.Random(seed) if seed is not None else self._rng
        generated = generate_puzzle(tier, rng, max_attempts=max_attempts, strict=strict)
        return self.install(generated)

    def install(self, generated: GeneratedPuzzle) -> PuzzleView:
        """Atomically replace the active puzzle with ``generated``."""

        with self._lock:
            self._puzzle = grid_copy(generated.puzzle)
            self._clues = [row[:] for row in generated.clue_mask]
            self._solution = grid_copy(generated.solution)
            self._working = grid_copy(generated.puzzle)
            self._notes = _empty_notes()
            self._meta = {
                "tier": generated.tier.value,
                "removed": generated.removed,
                "exhausted": generated.exhausted,
            }
            self._history.clear()
            log.append_event({"event": "session.installed", **self._meta, "puzzle": to_string(self._puzzle)})
            return self._view()

    def load_bundle(self, payload: Any) -> PuzzleView:
        """Install a puzzle supplied by the host as a bundle.

        The puzzle must have exactly one completion; that completion becomes
        the hidden solution.
        """

        puzzle, tier, bundled_solution = parse_bundle(payload)
        if count_solutions(puzzle, limit=2) != 1:
            raise ContractError("not-unique", "puzzle must have exactly one completion")
        solution = solved_copy(puzzle)
        if bundled_solution is not None and bundled_solution != solution:
            raise ContractError("solution-mismatch", "bundled solution is not the puzzle's completion")

        removed = SIZE * SIZE - count_filled(puzzle)
        generated = GeneratedPuzzle(
            puzzle=puzzle,
            clue_mask=clue_mask_of(puzzle),
            solution=solution,
            tier=tier,
            target=int(payload.get("target", removed)),
            removed=removed,
            attempts=0,
            exhausted=bool(payload.get("exhausted", False)),
        )
        return self.install(generated)

    def restart(self) -> Grid:
        """Revert the working grid to the clues; returns a copy of it."""

        with self._lock:
            self._require_puzzle()
            self._working = grid_copy(self._puzzle)
            self._notes = _empty_notes()
            self._history.clear()
            return grid_copy(self._working)

    # ---------- moves ----------

    def apply_move(self, row: int, col: int, value: int) -> MoveResult:
        """Write ``value`` (0 erases) into an editable cell.

        Raises :class:`IllegalEdit` for clue cells. Whether the digit is
        right is reported on the result, not enforced.
        """

        _check_cell(row, col)
        _check_value(value)
        with self._lock:
            self._require_puzzle()
            if self._clues[row][col]:
                raise IllegalEdit(row, col)
            previous = self._working[row][col]
            result = self._write(row, col, value, previous)
            if value != EMPTY:
                self._notes[row][col].clear()
            if previous != value:
                self._history.record(Edit(row=row, col=col, previous=previous, value=value))
            return result

    def _write(self, row: int, col: int, value: int, previous: int) -> MoveResult:
        grid = self._working
        if value == EMPTY:
            grid[row][col] = EMPTY
            return MoveResult(row, col, value, previous, legal=None, matches_solution=None)
        grid[row][col] = EMPTY
        legal = is_legal(grid, row, col, value)
        grid[row][col] = value
        return MoveResult(
            row,
            col,
            value,
            previous,
            legal=legal,
            matches_solution=value == self._solution[row][col],
        )

    def undo(self) -> Optional[Edit]:
        with self._lock:
            self._require_puzzle()
            edit = self._history.undo()
            if edit is not None:
                self._working[edit.row][edit.col] = edit.previous
            return edit

    def redo(self) -> Optional[Edit]:
        with self._lock:
            self._require_puzzle()
            edit = self._history.redo()
            if edit is not None:
                self._working[edit.row][edit.col] = edit.value
            return edit

    @property
    def can_undo(self) -> bool:
        with self._lock:
            return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        with self._lock:
            return self._history.can_redo

    # ---------- pencil notes ----------

    def toggle_note(self, row: int, col: int, digit: int) -> List[int]:
        """Add ``digit`` to the cell's notes, or remove it if already noted.

        Returns the cell's notes in ascending order. Clue cells take no notes.
        """

        _check_cell(row, col)
        _check_value(digit)
        if digit == EMPTY:
            raise ValueError("note digit must be within 1..9")
        with self._lock:
            self._require_puzzle()
            if self._clues[row][col]:
                raise IllegalEdit(row, col)
            cell = self._notes[row][col]
            if digit in cell:
                cell.discard(digit)
            else:
                cell.add(digit)
            return sorted(cell)

    def notes(self, row: int, col: int) -> List[int]:
        _check_cell(row, col)
        with self._lock:
            self._require_puzzle()
            return sorted(self._notes[row][col])

    # ---------- queries ----------

    def is_complete(self) -> bool:
        """Full revalidation of the working grid."""

        with self._lock:
            self._require_puzzle()
            return is_solved(self._working)

    def hint(self) -> Optional[Hint]:
        """Pick a random empty cell and reveal its solution value. Does not edit the grid."""

        with self._lock:
            self._require_puzzle()
            cells = empty_cells(self._working)
            if not cells:
                return None
            row, col = self._rng.choice(cells)
            return Hint(row=row, col=col, value=self._solution[row][col])

    def remaining_counts(self) -> Dict[int, int]:
        """How many more of each digit the grid needs; negative once a digit is over-placed."""

        with self._lock:
            self._require_puzzle()
            count = {d: SIZE for d in DIGITS}
            for row in self._working:
                for v in row:
                    if v != EMPTY:
                        count[v] -= 1
            return count

    def candidates(self, row: int, col: int) -> List[int]:
        _check_cell(row, col)
        with self._lock:
            self._require_puzzle()
            return legal_candidates(self._working, row, col)

    def is_clue(self, row: int, col: int) -> bool:
        _check_cell(row, col)
        with self._lock:
            self._require_puzzle()
            return self._clues[row][col]

    def working_grid(self) -> Grid:
        with self._lock:
            self._require_puzzle()
            return grid_copy(self._working)

    def clue_mask(self) -> ClueMask:
        with self._lock:
            self._require_puzzle()
            return [row[:] for row in self._clues]

    def view(self) -> PuzzleView:
        with self._lock:
            self._require_puzzle()
            return self._view()

    @property
    def has_puzzle(self) -> bool:
        return self._puzzle is not None

    def _view(self) -> PuzzleView:
        return PuzzleView(
            working_grid=grid_copy(self._working),
            clue_mask=[row[:] for row in self._clues],
            tier=self._meta["tier"],
            removed=self._meta["removed"],
            exhausted=self._meta["exhausted"],
        )

    def _require_puzzle(self) -> None:
        if self._puzzle is None:
            raise RuntimeError("no puzzle installed; call new_puzzle() first")


__all__ = ["Hint", "MoveResult", "PuzzleView", "Session"]
