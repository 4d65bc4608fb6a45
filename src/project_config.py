"""Utility helpers for loading project-wide configuration."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import-untyped]


_CONFIG_FILENAME = "config.toml"
_CONFIG_ENV_VAR = "SUDOKU_CONFIG_PATH"
_MISSING = object()


def _config_path() -> Path:
    override = os.environ.get(_CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override)
    return Path(__file__).resolve().parents[1] / _CONFIG_FILENAME


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """Parse the generator/session/log settings once and cache them.

    The file is ``config.toml`` at the repository root unless
    ``SUDOKU_CONFIG_PATH`` names another one.
    """
    path = _config_path()
    if not path.is_file():
        raise RuntimeError(
            f"Sudoku settings not found at '{path}' (set {_CONFIG_ENV_VAR} to override)"
        )
    with path.open("rb") as fh:
        return tomllib.load(fh)


def get_section(path: str, default: Any = _MISSING) -> Any:
    """Look up a dotted ``path`` such as ``"generator.tiers.tier1"``.

    Returns ``default`` when any segment is absent; without a default a
    missing path raises ``KeyError``. An explicit ``None`` default is honoured.
    """

    node: Any = get_config()
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            if default is _MISSING:
                raise KeyError(f"Configuration path '{path}' not found")
            return default
        node = node[part]
    return node


def reload() -> None:
    """Clear the cached configuration so the next lookup re-reads the file."""

    get_config.cache_clear()


__all__ = ["get_config", "get_section", "reload"]
