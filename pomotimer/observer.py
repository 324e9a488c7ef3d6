"""Bridge between engine signals and the UI's event channel.

The shell hands ``connect_observer`` a single ``callback(event, payload)``
and relays whatever it receives to the front end under the event names
in ``EVENT_NAMES``.  Delivery is fire-and-forget.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .timer.engine import TimerEngine


logger = logging.getLogger(__name__)

# signal attribute → event name seen by the UI
EVENT_NAMES: dict[str, str] = {
    "timer_update": "timer-update",
    "period_complete": "period-complete",
    "pomodoro_completed": "pomodoro-completed",
    "period_changed": "period-changed",
}

Observer = Callable[[str, Any], None]


def connect_observer(engine: TimerEngine, callback: Observer) -> Callable[[], None]:
    """Forward every engine signal to ``callback(event_name, payload)``.

    ``payload`` is the signal argument, or ``None`` for
    ``period-complete``.  Exceptions raised by ``callback`` are logged
    and dropped.  Returns a function that disconnects the observer.
    """
    connections = []
    for signal_name, event in EVENT_NAMES.items():
        handler = _forwarder(event, callback)
        getattr(engine, signal_name).connect(handler)
        connections.append((signal_name, handler))

    def disconnect() -> None:
        for signal_name, handler in connections:
            try:
                getattr(engine, signal_name).disconnect(handler)
            except (TypeError, RuntimeError):
                logger.debug("%s already disconnected", signal_name)
        connections.clear()

    return disconnect


def _forwarder(event: str, callback: Observer) -> Callable[..., None]:
    def forward(*args) -> None:
        payload = args[0] if args else None
        try:
            callback(event, payload)
        except Exception:
            logger.warning("Observer failed handling %s", event, exc_info=True)

    return forward


def completion_message(was_work_period: bool) -> tuple[str, str]:
    """Title and body of the desktop notification for ``period-complete``."""
    if was_work_period:
        return "Break Time!", "Great job! Take a break."
    return "Work Time!", "Break is over. Let's get back to work!"


def format_time(seconds: int) -> str:
    """``MM:SS`` for a countdown display."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
