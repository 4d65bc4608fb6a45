"""Puzzle bundle contracts shared with host applications."""

from __future__ import annotations

from .bundle import load_schema, make_bundle, parse_bundle, validate_bundle
from .errors import ContractError

__all__ = [
    "ContractError",
    "load_schema",
    "make_bundle",
    "parse_bundle",
    "validate_bundle",
]
