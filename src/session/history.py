"""Bounded undo/redo history of cell edits."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional


@dataclass(frozen=True)
class Edit:
    """One applied move: ``previous`` is what the cell held before ``value``."""

    row: int
    col: int
    previous: int
    value: int


class MoveHistory:
    """Linear undo/redo stack; recording a new edit discards the redo branch.

    Only the newest ``limit`` edits are kept; older ones fall off the bottom.
    """

    def __init__(self, limit: int = 50) -> None:
        if limit < 1:
            raise ValueError("history limit must be positive")
        self.limit = limit
        self._done: Deque[Edit] = deque(maxlen=limit)
        self._undone: List[Edit] = []

    def record(self, edit: Edit) -> None:
        self._done.append(edit)
        self._undone.clear()

    def undo(self) -> Optional[Edit]:
        if not self._done:
            return None
        edit = self._done.pop()
        self._undone.append(edit)
        return edit

    def redo(self) -> Optional[Edit]:
        if not self._undone:
            return None
        edit = self._undone.pop()
        self._done.append(edit)
        return edit

    @property
    def can_undo(self) -> bool:
        return bool(self._done)

    @property
    def can_redo(self) -> bool:
        return bool(self._undone)

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)


__all__ = ["Edit", "MoveHistory"]
