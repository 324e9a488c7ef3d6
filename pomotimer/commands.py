"""Command surface exposed to the UI layer.

Each command maps a name (plus the legacy ``*_timer`` aliases) onto a
``TimerEngine`` operation.  ``dispatch`` never raises; failures travel
back as a ``CommandResult`` with ``ok=False`` and an error string.

Usage::

    commands = CommandDispatcher(engine)
    commands.dispatch("update_settings", work_minutes=50, break_minutes=10)
    state = commands.dispatch("get_timer_state").value
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from .timer.engine import TimerEngine


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    value: Any = None
    error: str | None = None


class CommandError(ValueError):
    """Bad command name or arguments."""


def _unsigned(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CommandError(f"{name} must be an unsigned integer, got {value!r}")
    if value < 0:
        raise CommandError(f"{name} must not be negative, got {value}")
    return value


def _flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise CommandError(f"{name} must be a boolean, got {value!r}")
    return value


class CommandDispatcher:
    """Name-based access to one ``TimerEngine``."""

    def __init__(self, engine: TimerEngine) -> None:
        self._engine = engine
        self._handlers: dict[str, Callable[..., Any]] = {
            "start": self._start,
            "pause": self._pause,
            "reset": self._reset,
            "switch_period": self._switch_period,
            "update_settings": self._update_settings,
            "get_timer_state": self._get_timer_state,
        }
        self._aliases: dict[str, str] = {
            "start_timer": "start",
            "pause_timer": "pause",
            "reset_timer": "reset",
        }

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    def commands(self) -> list[str]:
        """Registered command names, aliases excluded."""
        return list(self._handlers)

    def dispatch(self, name: str, **kwargs: Any) -> CommandResult:
        handler = self._handlers.get(self._aliases.get(name, name))
        if handler is None:
            logger.warning("Unknown command: %s", name)
            return CommandResult(False, error=f"unknown command: {name}")
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as exc:
            logger.warning("Rejected %s: %s", name, exc)
            return CommandResult(False, error=str(exc))
        try:
            value = handler(**kwargs)
        except CommandError as exc:
            logger.warning("Rejected %s: %s", name, exc)
            return CommandResult(False, error=str(exc))
        except Exception as exc:
            logger.exception("Command %s failed", name)
            return CommandResult(False, error=f"internal error: {exc}")
        return CommandResult(True, value=value)

    # ── handlers ──────────────────────────────────────────────────────

    def _start(self) -> None:
        self._engine.start()

    def _pause(self) -> None:
        self._engine.pause()

    def _reset(self, to_work_period: bool) -> None:
        self._engine.reset(_flag("to_work_period", to_work_period))

    def _switch_period(self) -> None:
        self._engine.switch_period()

    def _update_settings(self, work_minutes: int, break_minutes: int) -> None:
        self._engine.update_settings(
            _unsigned("work_minutes", work_minutes),
            _unsigned("break_minutes", break_minutes),
        )

    def _get_timer_state(self) -> dict:
        return self._engine.get_state().to_dict()
