"""Light-weight JSONL event log with rotation support.

Events are always kept in a bounded in-memory buffer. They are written to
disk only after :func:`configure` (or the ``log.dir`` config key) names a
directory.
"""

from __future__ import annotations

import json
import threading
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Deque, Dict, List

from project_config import get_section

__all__ = ["configure", "append_event", "current_log_path", "recent_events", "reset"]

_DEFAULT_MAX_BYTES = 100 * 1024 * 1024
_DEFAULT_BUFFER = 256
_LOCK = threading.Lock()
_LOG_DIR: Path | None = None
_MAX_BYTES = _DEFAULT_MAX_BYTES
_CURRENT_PATH: Path | None = None
_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=_DEFAULT_BUFFER)
_CONFIGURED = False


def configure(
    base_dir: str | Path | None,
    *,
    max_bytes: int | None = None,
    buffer_size: int | None = None,
) -> None:
    """Configure the logger to use ``base_dir`` for all files (``None`` disables files)."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH, _BUFFER, _CONFIGURED
    with _LOCK:
        _LOG_DIR = Path(base_dir) if base_dir else None
        _MAX_BYTES = max_bytes or _DEFAULT_MAX_BYTES
        _CURRENT_PATH = None
        if buffer_size is not None:
            _BUFFER = deque(_BUFFER, maxlen=max(1, buffer_size))
        _CONFIGURED = True


def _configure_from_settings() -> None:
    section = get_section("log", {})
    configure(
        section.get("dir") or None,
        max_bytes=int(section.get("max_bytes", _DEFAULT_MAX_BYTES)),
        buffer_size=int(section.get("buffer_size", _DEFAULT_BUFFER)),
    )


def _date_prefix() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d")


def _resolve_log_path(log_dir: Path) -> Path:
    global _CURRENT_PATH
    date_dir = log_dir / _date_prefix()
    date_dir.mkdir(parents=True, exist_ok=True)

    if _CURRENT_PATH is not None and _CURRENT_PATH.parent == date_dir and _CURRENT_PATH.exists():
        if _CURRENT_PATH.stat().st_size < _MAX_BYTES:
            return _CURRENT_PATH

    counter = 0
    while True:
        candidate = date_dir / f"generation_{counter:02d}.jsonl"
        if not candidate.exists() or candidate.stat().st_size < _MAX_BYTES:
            _CURRENT_PATH = candidate
            return candidate
        counter += 1


def append_event(event: Dict[str, Any]) -> Path | None:
    """Record ``event``; return the JSONL file it was appended to, if any."""

    if not _CONFIGURED:
        _configure_from_settings()

    payload = dict(event)
    payload.setdefault("ts", datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    line = json.dumps(payload, sort_keys=True, ensure_ascii=False)
    with _LOCK:
        _BUFFER.append(payload)
        if _LOG_DIR is None:
            return None
        path = _resolve_log_path(_LOG_DIR)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")
    return path


def recent_events(event: str | None = None) -> List[Dict[str, Any]]:
    """Return buffered events, oldest first, optionally filtered by ``event`` name."""

    with _LOCK:
        items = list(_BUFFER)
    if event is None:
        return items
    return [item for item in items if item.get("event") == event]


def current_log_path() -> Path | None:
    return _CURRENT_PATH


def reset() -> None:
    """Drop buffered events and forget the configured directory."""

    global _LOG_DIR, _MAX_BYTES, _CURRENT_PATH, _BUFFER, _CONFIGURED
    with _LOCK:
        _BUFFER = deque(maxlen=_DEFAULT_BUFFER)
        _MAX_BYTES = _DEFAULT_MAX_BYTES
        _LOG_DIR = None
        _CURRENT_PATH = None
        _CONFIGURED = False
