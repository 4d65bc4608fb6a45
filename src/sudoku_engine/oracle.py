"""Uniqueness oracle used by the carver."""

from __future__ import annotations

import threading
from typing import Optional

from .grid import Grid
from .solver import count_solutions, first_empty_cell


def is_unique(partial: Grid, cancel: Optional[threading.Event] = None) -> bool:
    """Return ``True`` iff ``partial`` has exactly one completion.

    A grid without completions (or with conflicting givens) is reported as
    not unique. The search stops as soon as a second completion turns up.
    """

    if first_empty_cell(partial) is None:
        return count_solutions(partial, limit=1, cancel=cancel) == 1
    return count_solutions(partial, limit=2, cancel=cancel) == 1


__all__ = ["is_unique"]
