"""JSON Schema contract for exchanging puzzles with a host application."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from orchestrator.pipeline import GeneratedPuzzle
from sudoku_engine.checker import is_consistent, is_solved
from sudoku_engine.grid import Grid, from_string, to_string
from sudoku_engine.tiers import Tier

from .errors import ContractError

_SCHEMA_ROOT = Path(__file__).resolve().parent / "schemas"
_BUNDLE_SCHEMA = "puzzle_bundle.schema.json"


@lru_cache(maxsize=None)
def load_schema(name: str = _BUNDLE_SCHEMA) -> Dict[str, Any]:
    """Load a schema shipped with the package."""

    path = _SCHEMA_ROOT / name
    try:
        return json.loads(path.read_text("utf-8"))
    except FileNotFoundError as exc:
        raise ContractError("schema-not-found", name) from exc


def _format_path(error: jsonschema.ValidationError) -> str:
    parts = [str(p) for p in error.absolute_path]
    return "/" + "/".join(parts) if parts else "/"


def validate_bundle(payload: Any) -> None:
    """Raise :class:`ContractError` unless ``payload`` satisfies the bundle schema.

    On top of the schema, the puzzle clues must not conflict, and a bundled
    solution must agree with every clue.
    """

    schema = load_schema()
    validator = jsonschema.Draft202012Validator(schema)
    first = jsonschema.exceptions.best_match(validator.iter_errors(payload))
    if first is not None:
        raise ContractError("schema-violation", f"{_format_path(first)}: {first.message}")

    puzzle = from_string(payload["puzzle"])
    if not is_consistent(puzzle):
        raise ContractError("conflicting-clues", "puzzle repeats a digit in a row, column or block")

    solution_text = payload.get("solution")
    if solution_text is not None:
        solution = from_string(solution_text)
        if not is_solved(solution):
            raise ContractError("invalid-solution", "solution is not a completed grid")
        for r in range(9):
            for c in range(9):
                if puzzle[r][c] and puzzle[r][c] != solution[r][c]:
                    raise ContractError("solution-mismatch", f"clue at ({r}, {c}) differs from solution")


def make_bundle(generated: GeneratedPuzzle, *, include_solution: bool = False) -> Dict[str, Any]:
    """Serialise ``generated`` into a bundle; the solution is withheld unless asked for."""

    bundle: Dict[str, Any] = {
        "puzzle": to_string(generated.puzzle),
        "tier": generated.tier.value,
        "target": generated.target,
        "removed": generated.removed,
        "exhausted": generated.exhausted,
    }
    if include_solution:
        bundle["solution"] = to_string(generated.solution)
    return bundle


def parse_bundle(payload: Any) -> tuple[Grid, Tier, Optional[Grid]]:
    """Validate ``payload`` and return ``(puzzle, tier, solution_or_None)``."""

    validate_bundle(payload)
    solution_text = payload.get("solution")
    solution = from_string(solution_text) if solution_text is not None else None
    return from_string(payload["puzzle"]), Tier.parse(payload["tier"]), solution


__all__ = ["load_schema", "make_bundle", "parse_bundle", "validate_bundle"]
