"""Command line helpers for generating, solving and checking puzzles."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List

from contracts import make_bundle
from orchestrator import log
from orchestrator.executor import SequentialExecutor
from orchestrator.task import STATUS_OK, GenerationTask
from sudoku_engine.grid import from_string, print_grid, to_string
from sudoku_engine.solver import count_solutions, solved_copy
from sudoku_engine.tiers import Tier
from tools.reports import event_report


def _read_puzzle(value: str):
    path = Path(value)
    if len(value) != 81 and path.is_file():
        value = path.read_text(encoding="utf-8")
    return from_string(value)


def cmd_generate(args: argparse.Namespace) -> int:
    if args.log_dir:
        log.configure(args.log_dir)
    task = GenerationTask(
        tier=args.tier,
        seed=args.seed,
        max_attempts=args.max_attempts,
        strict=True if args.strict else None,
    )
    result = SequentialExecutor().submit(task).result()
    if result.puzzle is None:
        print(f"generation {result.status}: {result.error}", file=sys.stderr)
        return 2

    generated = result.puzzle
    if args.json:
        bundle = make_bundle(generated, include_solution=args.with_solution)
        print(json.dumps(bundle, indent=2, sort_keys=True))
    else:
        print(print_grid(generated.puzzle))
        print(f"\nTier: {generated.tier.value}  removed: {generated.removed}/{generated.target}")
        if args.with_solution:
            print("\nSolution:")
            print(print_grid(generated.solution))
    if result.status != STATUS_OK:
        print(
            f"warning: carving stopped early ({generated.removed} of {generated.target} cells removed)",
            file=sys.stderr,
        )
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    grid = _read_puzzle(args.puzzle)
    solved = solved_copy(grid)
    if solved is None:
        print("no solution", file=sys.stderr)
        return 1
    print(to_string(solved) if args.json else print_grid(solved))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    grid = _read_puzzle(args.puzzle)
    found = count_solutions(grid, limit=2)
    print(json.dumps({"solutions": found, "unique": found == 1}, sort_keys=True))
    return 0 if found == 1 else 1


def cmd_report_events(args: argparse.Namespace) -> int:
    base_dir = Path(args.path)
    files = sorted(base_dir.glob("**/*.jsonl"))
    if not files:
        raise SystemExit(f"No JSONL logs found under {base_dir}")
    summary = event_report.aggregate(files)
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sudoku puzzle generator and solver")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate a uniquely solvable puzzle")
    generate.add_argument(
        "--tier",
        type=Tier.parse,
        default=Tier.TIER2,
        help="Difficulty tier: tier1..tier4 or easy/medium/hard/expert",
    )
    generate.add_argument("--seed", default=None, help="Seed for reproducible puzzles")
    generate.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Upper bound on uniqueness checks while carving",
    )
    generate.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of returning a best-effort puzzle when carving stops early",
    )
    generate.add_argument("--with-solution", action="store_true")
    generate.add_argument("--json", action="store_true", help="Emit a puzzle bundle as JSON")
    generate.add_argument("--log-dir", default=None, help="Write JSONL generation events here")
    generate.set_defaults(func=cmd_generate)

    solve = sub.add_parser("solve", help="Solve an 81-character puzzle (0 or . for empty)")
    solve.add_argument("puzzle", help="Puzzle string or path to a file holding one")
    solve.add_argument("--json", action="store_true", help="Print the solution as one line")
    solve.set_defaults(func=cmd_solve)

    check = sub.add_parser("check", help="Report whether a puzzle has exactly one solution")
    check.add_argument("puzzle", help="Puzzle string or path to a file holding one")
    check.set_defaults(func=cmd_check)

    report = sub.add_parser("report-events", help="Aggregate generation event logs")
    report.add_argument("path", help="Directory containing JSONL logs")
    report.set_defaults(func=cmd_report_events)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
