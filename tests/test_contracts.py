from __future__ import annotations

import pytest

from _grids import PUZZLE, SOLVED, solved_grid
from contracts import ContractError, load_schema, make_bundle, parse_bundle, validate_bundle
from orchestrator.pipeline import generate_puzzle
from session import Session
from sudoku_engine.grid import from_string, to_string
from sudoku_engine.tiers import Tier


def test_schema_is_draft_2020_12() -> None:
    schema = load_schema()
    assert schema["$schema"].endswith("2020-12/schema")
    assert schema["required"] == ["puzzle", "tier"]


def test_generated_bundle_round_trip() -> None:
    generated = generate_puzzle(Tier.TIER1, seed=77)
    bundle = make_bundle(generated)
    assert "solution" not in bundle
    validate_bundle(bundle)

    puzzle, tier, solution = parse_bundle(make_bundle(generated, include_solution=True))
    assert puzzle == generated.puzzle
    assert tier is Tier.TIER1
    assert solution == generated.solution


@pytest.mark.parametrize(
    "payload",
    [
        {"puzzle": PUZZLE},
        {"puzzle": PUZZLE[:-1], "tier": "tier1"},
        {"puzzle": PUZZLE, "tier": "tier7"},
        {"puzzle": PUZZLE, "tier": "tier1", "removed": 90},
        {"puzzle": PUZZLE, "tier": "tier1", "extra": True},
        ["not", "an", "object"],
    ],
)
def test_schema_violations(payload) -> None:
    with pytest.raises(ContractError) as excinfo:
        validate_bundle(payload)
    assert excinfo.value.code == "schema-violation"


def test_conflicting_clues_are_rejected() -> None:
    broken = "55" + PUZZLE[2:]
    with pytest.raises(ContractError) as excinfo:
        validate_bundle({"puzzle": broken, "tier": "tier1"})
    assert excinfo.value.code == "conflicting-clues"


def test_solution_must_match_clues() -> None:
    swapped = SOLVED[1] + SOLVED[0] + SOLVED[2:]
    with pytest.raises(ContractError) as excinfo:
        validate_bundle({"puzzle": PUZZLE, "tier": "tier1", "solution": swapped})
    assert excinfo.value.code == "invalid-solution"

    other = solved_grid()
    # relabel digits 1 and 2: still a valid grid, but clue 1 at (1, 3) changes
    other = [[{1: 2, 2: 1}.get(v, v) for v in row] for row in other]
    with pytest.raises(ContractError) as excinfo:
        validate_bundle({"puzzle": PUZZLE, "tier": "tier1", "solution": to_string(other)})
    assert excinfo.value.code == "solution-mismatch"


def test_session_loads_unique_bundle() -> None:
    session = Session()
    view = session.load_bundle({"puzzle": PUZZLE, "tier": "tier2", "solution": SOLVED})
    assert view.working_grid == from_string(PUZZLE)
    assert view.removed == 51
    hint = session.hint()
    assert hint.value == solved_grid()[hint.row][hint.col]


def test_session_rejects_non_unique_bundle() -> None:
    sparse = SOLVED[:9] + "0" * 72
    session = Session()
    with pytest.raises(ContractError) as excinfo:
        session.load_bundle({"puzzle": sparse, "tier": "tier4"})
    assert excinfo.value.code == "not-unique"
    assert session.has_puzzle is False
