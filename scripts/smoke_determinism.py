#!/usr/bin/env python3
"""Smoke-test deterministic, uniquely solvable puzzle generation."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from orchestrator.pipeline import generate_puzzle
from sudoku_engine.checker import is_solved
from sudoku_engine.grid import to_string
from sudoku_engine.oracle import is_unique


def _run_with_seed(seed: str, tier: str) -> dict:
    generated = generate_puzzle(tier, seed=seed)
    if not is_solved(generated.solution):
        raise AssertionError(f"invalid solution for seed {seed}")
    if not is_unique(generated.puzzle):
        raise AssertionError(f"puzzle for seed {seed} is not unique")
    return {
        "puzzle": to_string(generated.puzzle),
        "solution": to_string(generated.solution),
        "removed": generated.removed,
    }


def main(tier: str = "tier1") -> int:
    first = _run_with_seed("deterministic-seed", tier)
    second = _run_with_seed("deterministic-seed", tier)

    for key in ("puzzle", "solution", "removed"):
        if first[key] != second[key]:
            print(f"determinism failed for {key}: {first[key]} vs {second[key]}")
            return 1

    third = _run_with_seed("different-seed", tier)
    if first["puzzle"] == third["puzzle"]:
        print(f"different seed produced identical puzzle: {first['puzzle']}")
        return 1

    print("Determinism smoke-test passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(*sys.argv[1:2]))
