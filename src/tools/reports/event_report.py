"""Aggregation helpers for generation event logs."""

from __future__ import annotations

import json
from collections import Counter, defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

__all__ = ["aggregate"]

_GENERATION_EVENTS = {
    "generation.complete",
    "generation.exhausted",
    "generation.cancelled",
    "generation.failed",
}


def _load_events(paths: Iterable[Path]) -> Iterable[Mapping[str, Any]]:
    for path in paths:
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            yield json.loads(line)


def aggregate(paths: Iterable[Path]) -> Dict[str, Any]:
    """Summarise generation outcomes per tier across JSONL event files."""

    outcomes: Counter = Counter()
    per_tier: Dict[str, Counter] = defaultdict(Counter)
    time_ms: Dict[str, list] = defaultdict(list)
    shortfall: Dict[str, list] = defaultdict(list)

    for event in _load_events(paths):
        name = event.get("event")
        if name not in _GENERATION_EVENTS:
            continue
        outcome = name.split(".", 1)[1]
        outcomes[outcome] += 1
        tier = str(event.get("tier", "unknown"))
        per_tier[tier][outcome] += 1
        if isinstance(event.get("time_ms"), int):
            time_ms[tier].append(event["time_ms"])
        if outcome == "exhausted":
            shortfall[tier].append(int(event.get("target", 0)) - int(event.get("removed", 0)))

    tiers: Dict[str, Any] = {}
    for tier in sorted(per_tier):
        samples = time_ms[tier]
        gaps = shortfall[tier]
        tiers[tier] = {
            "outcomes": dict(per_tier[tier]),
            "mean_time_ms": round(sum(samples) / len(samples), 1) if samples else None,
            "max_shortfall": max(gaps) if gaps else 0,
        }

    return {
        "total_events": sum(outcomes.values()),
        "outcomes": dict(outcomes),
        "tiers": tiers,
    }
