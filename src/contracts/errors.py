"""Shared error types for puzzle bundle contracts."""

from __future__ import annotations

from typing import Optional


class ContractError(RuntimeError):
    """Exception raised when a puzzle bundle fails validation."""

    def __init__(self, code: str, detail: Optional[str] = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


__all__ = ["ContractError"]
