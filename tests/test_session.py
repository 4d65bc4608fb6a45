from __future__ import annotations

import random
import threading

import pytest

from _grids import puzzle_grid, solved_grid
from orchestrator import log
from orchestrator.pipeline import GeneratedPuzzle
from session import Session
from sudoku_engine.carver import clue_mask_of
from sudoku_engine.errors import IllegalEdit
from sudoku_engine.tiers import Tier


def setup_function():
    log.reset()


def _generated() -> GeneratedPuzzle:
    puzzle = puzzle_grid()
    return GeneratedPuzzle(
        puzzle=puzzle,
        clue_mask=clue_mask_of(puzzle),
        solution=solved_grid(),
        tier=Tier.TIER2,
        target=51,
        removed=51,
        attempts=60,
        exhausted=False,
    )


def _session(seed: int = 0) -> Session:
    session = Session(random.Random(seed))
    session.install(_generated())
    return session


def _fill_with_solution(session: Session) -> None:
    solution = solved_grid()
    for r in range(9):
        for c in range(9):
            if not session.is_clue(r, c):
                session.apply_move(r, c, solution[r][c])


def test_operations_require_a_puzzle() -> None:
    session = Session()
    assert session.has_puzzle is False
    with pytest.raises(RuntimeError):
        session.apply_move(0, 2, 4)
    with pytest.raises(RuntimeError):
        session.hint()


def test_new_puzzle_installs_generated_grid() -> None:
    session = Session(random.Random(1))
    view = session.new_puzzle(Tier.TIER1, seed=42)
    assert view.tier == "tier1"
    assert view.working_grid == session.working_grid()
    for r in range(9):
        for c in range(9):
            assert view.clue_mask[r][c] == (view.working_grid[r][c] != 0)
    assert log.recent_events("session.installed")


def test_view_withholds_solution() -> None:
    view = _session().view()
    assert view.working_grid == puzzle_grid()
    assert not hasattr(view, "solution")


def test_move_on_clue_fails_without_change() -> None:
    session = _session()
    before = session.working_grid()
    with pytest.raises(IllegalEdit) as excinfo:
        session.apply_move(0, 0, 9)
    assert excinfo.value.row == 0 and excinfo.value.col == 0
    assert session.working_grid() == before
    assert session.can_undo is False


def test_move_writes_unconditionally_and_reports_correctness() -> None:
    session = _session()
    right = session.apply_move(0, 2, 4)
    assert right.legal is True and right.matches_solution is True
    assert right.previous == 0

    wrong = session.apply_move(0, 3, 5)  # 5 already sits in row 0
    assert wrong.legal is False and wrong.matches_solution is False
    assert session.working_grid()[0][3] == 5

    erased = session.apply_move(0, 3, 0)
    assert erased.previous == 5
    assert erased.legal is None and erased.matches_solution is None
    assert session.working_grid()[0][3] == 0


def test_move_argument_validation() -> None:
    session = _session()
    with pytest.raises(ValueError):
        session.apply_move(9, 0, 1)
    with pytest.raises(ValueError):
        session.apply_move(0, 2, 10)
    with pytest.raises(TypeError):
        session.apply_move(0, 2, "4")


def test_restart_then_solution_completes() -> None:
    session = _session()
    session.apply_move(0, 2, 9)
    session.apply_move(1, 1, 1)
    grid = session.restart()
    assert grid == puzzle_grid()
    assert session.can_undo is False
    assert session.is_complete() is False

    _fill_with_solution(session)
    assert session.is_complete() is True


def test_full_but_invalid_grid_is_not_complete() -> None:
    session = _session()
    _fill_with_solution(session)
    session.apply_move(0, 2, 1)
    session.apply_move(0, 7, 4)
    assert all(v for row in session.working_grid() for v in row)
    assert session.is_complete() is False


def test_hint_returns_solution_value_without_mutating() -> None:
    session = _session(seed=3)
    grid_before = session.working_grid()
    counts_before = session.remaining_counts()
    solution = solved_grid()
    for _ in range(20):
        hint = session.hint()
        assert grid_before[hint.row][hint.col] == 0
        assert hint.value == solution[hint.row][hint.col]
    assert session.working_grid() == grid_before
    assert session.remaining_counts() == counts_before


def test_hint_none_when_grid_is_full() -> None:
    session = _session()
    _fill_with_solution(session)
    assert session.hint() is None


def test_remaining_counts_track_moves() -> None:
    session = _session()
    counts = session.remaining_counts()
    assert set(counts) == set(range(1, 10))
    # Digit 5 appears three times among the clues.
    assert counts[5] == 6

    session.apply_move(0, 2, 4)
    assert session.remaining_counts()[4] == counts[4] - 1
    session.apply_move(0, 2, 0)
    assert session.remaining_counts()[4] == counts[4]


def test_remaining_counts_go_negative_when_digit_is_over_placed() -> None:
    session = _session()
    for r, c in ((0, 2), (0, 3), (0, 5), (0, 6), (0, 7), (0, 8)):
        session.apply_move(r, c, 5)
    before = session.remaining_counts()[5]
    assert before == 0

    session.apply_move(1, 1, 5)
    assert session.remaining_counts()[5] == before - 1 == -1


def test_undo_and_redo_moves() -> None:
    session = _session()
    session.apply_move(0, 2, 4)
    session.apply_move(0, 2, 1)
    assert session.undo().value == 1
    assert session.working_grid()[0][2] == 4
    assert session.undo().value == 4
    assert session.working_grid()[0][2] == 0
    assert session.undo() is None
    session.redo()
    assert session.working_grid()[0][2] == 4


def test_candidates_and_clue_queries() -> None:
    session = _session()
    assert session.candidates(0, 2) == [1, 2, 4]
    assert session.candidates(0, 0) == []
    assert session.is_clue(0, 0) is True
    assert session.is_clue(0, 2) is False
    mask = session.clue_mask()
    mask[0][0] = False
    assert session.is_clue(0, 0) is True


def test_returned_grids_are_copies() -> None:
    session = _session()
    grid = session.working_grid()
    grid[0][2] = 4
    assert session.working_grid()[0][2] == 0


def test_concurrent_moves_and_queries() -> None:
    session = _session()
    solution = solved_grid()
    cells = [(r, c) for r in range(9) for c in range(9) if not session.is_clue(r, c)]
    errors = []

    def writer():
        for r, c in cells:
            session.apply_move(r, c, solution[r][c])

    def reader():
        try:
            for _ in range(50):
                session.hint()
                session.remaining_counts()
                session.is_complete()
        except Exception as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not errors
    assert session.is_complete() is True


def test_toggle_note_adds_and_removes_sorted_digits() -> None:
    session = _session()
    assert session.notes(0, 2) == []
    session.toggle_note(0, 2, 4)
    assert session.toggle_note(0, 2, 1) == [1, 4]
    assert session.toggle_note(0, 2, 4) == [1]
    assert session.notes(0, 2) == [1]
    assert session.working_grid()[0][2] == 0


def test_notes_rejected_on_clues_and_bad_digits() -> None:
    session = _session()
    with pytest.raises(IllegalEdit):
        session.toggle_note(0, 0, 2)
    with pytest.raises(ValueError):
        session.toggle_note(0, 2, 0)
    with pytest.raises(ValueError):
        session.toggle_note(0, 2, 10)


def test_placement_clears_cell_notes_but_erase_keeps_them() -> None:
    session = _session()
    session.toggle_note(0, 2, 1)
    session.toggle_note(0, 2, 4)
    session.toggle_note(0, 3, 6)

    session.apply_move(0, 3, 0)
    assert session.notes(0, 3) == [6]

    session.apply_move(0, 2, 4)
    assert session.notes(0, 2) == []
    assert session.notes(0, 3) == [6]


def test_restart_and_install_clear_all_notes() -> None:
    session = _session()
    session.toggle_note(0, 2, 1)
    session.restart()
    assert session.notes(0, 2) == []

    session.toggle_note(1, 1, 7)
    session.install(_generated())
    assert session.notes(1, 1) == []


def test_undo_flags_wait_for_the_session_lock() -> None:
    session = _session()
    session.apply_move(0, 2, 4)
    seen = []

    def reader():
        seen.append(session.can_undo)

    with session._lock:
        thread = threading.Thread(target=reader)
        thread.start()
        thread.join(timeout=0.2)
        assert thread.is_alive()
        assert seen == []
    thread.join(timeout=5)
    assert seen == [True]
