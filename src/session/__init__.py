"""Consumer-facing play session."""

from __future__ import annotations

from .history import Edit, MoveHistory
from .state import Hint, MoveResult, PuzzleView, Session

__all__ = [
    "Edit",
    "Hint",
    "MoveHistory",
    "MoveResult",
    "PuzzleView",
    "Session",
]
