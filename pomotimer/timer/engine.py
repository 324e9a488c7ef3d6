"""Timer state machine for Pomotimer.

States
------
IDLE        Not counting down. Either never started, paused (the
            remaining time is kept in ``duration``) or just switched
            to a fresh phase.
RUNNING     A ticking thread is counting the active phase down.
COMPLETING  The countdown hit zero; the ticking thread announces it
            and flips the phase.

Transitions
-----------
IDLE → RUNNING              (start)
RUNNING → IDLE              (pause — remaining time retained)
RUNNING → COMPLETING → IDLE (countdown reaches 0, next phase at full length)
Any → IDLE                  (reset / switch_period)

Threading
---------
All state lives in one ``TimerState`` guarded by one ``threading.Lock``.
Commands hold the lock only while they read or mutate it; signals are
emitted after the lock is released.  The ticking thread polls the state
every ``poll_interval`` seconds and stops as soon as it sees the timer
idle or its run superseded by a newer ``start()``.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, asdict
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal


logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5

POLL_INTERVAL = 0.1  # seconds between state polls
EMIT_INTERVAL = 1.0  # seconds between timer_update emissions


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class TimerState:
    """Mutable timer state.  Only touched while holding the engine lock."""

    start_time: float | None = None
    duration: float = DEFAULT_WORK_MINUTES * 60.0  # remaining, seconds
    is_running: bool = False
    is_work_period: bool = True
    work_duration: float = DEFAULT_WORK_MINUTES * 60.0
    break_duration: float = DEFAULT_BREAK_MINUTES * 60.0
    completed_pomodoros: int = 0
    run_id: int = 0

    def phase_duration(self) -> float:
        """Full configured length of the active phase."""
        return self.work_duration if self.is_work_period else self.break_duration

    def remaining(self, now: float) -> float:
        if self.start_time is None:
            return max(self.duration, 0.0)
        return max(self.duration - (now - self.start_time), 0.0)


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view returned by ``TimerEngine.get_state()``."""

    is_running: bool
    is_work_period: bool
    remaining_seconds: int
    work_duration_minutes: int
    break_duration_minutes: int
    completed_pomodoros: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class _Ticker:
    """Bookkeeping for one ticking run."""

    run_id: int
    last_emit: float  # clock value of the last timer_update


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Thread-safe work/break countdown.

    Signals
    -------
    timer_update(remaining_seconds: int)
        About once per second while a countdown is running.
    period_complete()
        Once when a countdown reaches zero, before the phase flips.
    pomodoro_completed(count: int)
        When a work phase ends (work → break only).
    period_changed(is_work_period: bool)
        On every phase flip, after the new phase is in place.
    """

    timer_update = pyqtSignal(int)
    period_complete = pyqtSignal()
    pomodoro_completed = pyqtSignal(int)
    period_changed = pyqtSignal(bool)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        clock: Callable[[], float] = time.monotonic,
        threaded: bool = True,
        poll_interval: float = POLL_INTERVAL,
        emit_interval: float = EMIT_INTERVAL,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._clock = clock
        self._threaded = threaded
        self._poll_interval = poll_interval
        self._emit_interval = emit_interval

        # ── shared state ──────────────────────────────────────────────
        self._lock = threading.Lock()
        self._state = TimerState(
            duration=work_minutes * 60.0,
            work_duration=work_minutes * 60.0,
            break_duration=break_minutes * 60.0,
        )

        # ── ticking ───────────────────────────────────────────────────
        self._ticker: _Ticker | None = None
        self._thread: threading.Thread | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._state.is_running

    @property
    def is_work_period(self) -> bool:
        with self._lock:
            return self._state.is_work_period

    @property
    def remaining_seconds(self) -> int:
        return self.get_state().remaining_seconds

    @property
    def completed_pomodoros(self) -> int:
        with self._lock:
            return self._state.completed_pomodoros

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or resume) the countdown.  No-op while running."""
        with self._lock:
            state = self._state
            if state.is_running:
                return
            now = self._clock()
            state.start_time = now
            state.is_running = True
            state.run_id += 1
            ticker = _Ticker(state.run_id, now)
            remaining = state.duration
            phase = _phase_name(state.is_work_period)

        self._ticker = ticker
        logger.info("Timer started: %s, %.1fs remaining", phase, remaining)
        if self._threaded:
            self._thread = threading.Thread(
                target=self._run_ticker,
                args=(ticker,),
                name=f"pomotimer-ticker-{ticker.run_id}",
                daemon=True,
            )
            self._thread.start()

    def pause(self) -> None:
        """Freeze the countdown, keeping the remaining time."""
        with self._lock:
            state = self._state
            if not state.is_running or state.start_time is None:
                return
            elapsed = self._clock() - state.start_time
            state.duration = max(state.duration - elapsed, 0.0)
            state.start_time = None
            state.is_running = False
            remaining = state.duration
        logger.info("Timer paused: %.1fs remaining", remaining)

    def reset(self, to_work_period: bool = True) -> None:
        """Stop and rewind to the full length of the chosen phase."""
        with self._lock:
            state = self._state
            state.start_time = None
            state.is_running = False
            state.is_work_period = bool(to_work_period)
            state.duration = state.phase_duration()
        logger.info("Timer reset to %s", _phase_name(to_work_period))

    def switch_period(self) -> None:
        """Flip to the other phase and stop the countdown.

        Work → break counts a completed pomodoro.  The caller decides
        whether to ``start()`` the new phase.
        """
        with self._lock:
            completed, is_work = self._switch_locked()
        self._announce_switch(completed, is_work)

    def update_settings(self, work_minutes: int, break_minutes: int) -> None:
        """Set both phase lengths.  An idle timer picks them up at once;
        a running countdown is left alone."""
        with self._lock:
            state = self._state
            state.work_duration = work_minutes * 60.0
            state.break_duration = break_minutes * 60.0
            if not state.is_running:
                state.duration = state.phase_duration()
        logger.info(
            "Settings updated: work=%smin break=%smin", work_minutes, break_minutes
        )

    def get_state(self) -> TimerSnapshot:
        with self._lock:
            state = self._state
            remaining = state.remaining(self._clock())
            return TimerSnapshot(
                is_running=state.is_running,
                is_work_period=state.is_work_period,
                remaining_seconds=_whole_seconds(remaining),
                work_duration_minutes=int(state.work_duration // 60),
                break_duration_minutes=int(state.break_duration // 60),
                completed_pomodoros=state.completed_pomodoros,
            )

    def join_ticker(self, timeout: float | None = None) -> bool:
        """Wait for the current ticking thread to exit.

        Returns True when no ticking thread is left alive.
        """
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — ticking
    # ══════════════════════════════════════════════════════════════════

    def _run_ticker(self, ticker: _Ticker) -> None:
        while self._poll(ticker):
            time.sleep(self._poll_interval)
        logger.debug("Ticker %d stopped", ticker.run_id)

    def _poll(self, ticker: _Ticker) -> bool:
        """One poll of the ticking loop.  Returns False once it should stop."""
        with self._lock:
            state = self._state
            if (
                not state.is_running
                or state.start_time is None
                or state.run_id != ticker.run_id
            ):
                return False
            now = self._clock()
            elapsed = now - state.start_time
            expired = elapsed >= state.duration
            remaining = _whole_seconds(state.duration - elapsed)

        if expired:
            logger.info("Countdown finished")
            self._emit("timer_update", 0)
            self._emit("period_complete")
            self._complete_period(ticker)
            return False

        if now - ticker.last_emit >= self._emit_interval:
            ticker.last_emit = now
            logger.debug("Tick: %ds remaining", remaining)
            self._emit("timer_update", remaining)
        return True

    def _complete_period(self, ticker: _Ticker) -> None:
        with self._lock:
            # A pause/reset may have slipped in after the expiry check.
            if not self._state.is_running or self._state.run_id != ticker.run_id:
                return
            completed, is_work = self._switch_locked()
        self._announce_switch(completed, is_work)

    def _switch_locked(self) -> tuple[int | None, bool]:
        state = self._state
        state.is_work_period = not state.is_work_period
        completed = None
        if not state.is_work_period:
            state.completed_pomodoros += 1
            completed = state.completed_pomodoros
        state.duration = state.phase_duration()
        state.start_time = None
        state.is_running = False
        return completed, state.is_work_period

    def _announce_switch(self, completed: int | None, is_work: bool) -> None:
        logger.info("Switched to %s", _phase_name(is_work))
        if completed is not None:
            logger.info("Pomodoro #%d completed", completed)
            self._emit("pomodoro_completed", completed)
        self._emit("period_changed", is_work)

    def _emit(self, name: str, *args) -> None:
        """Fire a signal; a torn-down observer channel is not an error."""
        try:
            getattr(self, name).emit(*args)
        except RuntimeError:
            logger.debug("Dropped %s: observer channel unavailable", name)


def _whole_seconds(seconds: float) -> int:
    return int(max(seconds, 0.0))


def _phase_name(is_work_period: bool) -> str:
    return "work" if is_work_period else "break"
