"""Optional file-backed log of envelope parameter and gate events."""
from __future__ import annotations

import threading
from pathlib import Path

from .state import EVENT_LOG_FILE

__all__ = ["enable_event_logging", "event_logging_enabled", "log_event"]


_LOG_EVENTS = False
_LOG_PATH = Path(EVENT_LOG_FILE)
_LOG_LOCK = threading.Lock()


def enable_event_logging(enabled: bool) -> None:
    """Enable or disable the envelope event log."""

    global _LOG_EVENTS
    _LOG_EVENTS = bool(enabled)


def event_logging_enabled() -> bool:
    """Return ``True`` when envelope event logging is enabled."""

    return _LOG_EVENTS


def log_event(message: str) -> None:
    """Append ``message`` to the event log when logging is enabled."""

    if not _LOG_EVENTS:
        return
    try:
        _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    try:
        with _LOG_LOCK:
            with _LOG_PATH.open("a", encoding="utf-8") as handle:
                handle.write(f"{message}\n")
    except OSError:
        return
