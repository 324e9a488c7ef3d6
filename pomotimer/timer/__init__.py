"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    TimerSnapshot,
    DEFAULT_WORK_MINUTES,
    DEFAULT_BREAK_MINUTES,
    POLL_INTERVAL,
    EMIT_INTERVAL,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "TimerSnapshot",
    "DEFAULT_WORK_MINUTES",
    "DEFAULT_BREAK_MINUTES",
    "POLL_INTERVAL",
    "EMIT_INTERVAL",
]
