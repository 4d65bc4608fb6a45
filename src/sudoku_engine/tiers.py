"""Difficulty tiers and their removal targets."""

from __future__ import annotations

from enum import Enum
from typing import Dict

from project_config import get_section

DEFAULT_REMOVALS: Dict[str, int] = {
    "tier1": 35,
    "tier2": 45,
    "tier3": 55,
    "tier4": 65,
}

_ALIASES = {
    "easy": "tier1",
    "medium": "tier2",
    "hard": "tier3",
    "expert": "tier4",
}


class Tier(Enum):
    """Difficulty tier; higher tiers carve more cells."""

    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    TIER4 = "tier4"

    @property
    def removals(self) -> int:
        return removal_target(self)

    @classmethod
    def parse(cls, value) -> "Tier":
        """Accept a ``Tier``, its value (``"tier2"``), name, or an alias such as ``"hard"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            value = f"tier{value}"
        if not isinstance(value, str):
            raise TypeError(f"cannot interpret {value!r} as a tier")
        key = value.strip().lower()
        key = _ALIASES.get(key, key)
        for tier in cls:
            if tier.value == key or tier.name.lower() == key:
                return tier
        raise ValueError(f"unknown tier {value!r}")


def removal_targets() -> Dict[Tier, int]:
    """Removal target per tier, configured values over the built-in table."""

    configured = get_section("generator.tiers", {})
    targets: Dict[Tier, int] = {}
    for tier in Tier:
        raw = configured.get(tier.value, DEFAULT_REMOVALS[tier.value])
        value = int(raw)
        if not 0 <= value <= 81:
            raise ValueError(f"generator.tiers.{tier.value} must be within 0..81, got {value}")
        targets[tier] = value

    ordered = [targets[t] for t in Tier]
    if any(low >= high for low, high in zip(ordered, ordered[1:])):
        raise ValueError("generator.tiers removal targets must increase with the tier")
    return targets


def removal_target(tier: Tier) -> int:
    return removal_targets()[Tier.parse(tier)]


__all__ = ["DEFAULT_REMOVALS", "Tier", "removal_target", "removal_targets"]
