"""Shared test helpers for Pomotimer."""

from pomotimer.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def poll(engine: TimerEngine) -> bool:
    """Run one poll of the current ticker, as the ticking thread would."""
    ticker = engine._ticker
    return ticker is not None and engine._poll(ticker)


def advance(engine: TimerEngine, clock: FakeClock, seconds: float, step: float = 0.5) -> None:
    """Move the clock forward in ``step`` increments, polling after each."""
    elapsed = 0.0
    while elapsed < seconds:
        delta = min(step, seconds - elapsed)
        clock.advance(delta)
        elapsed += delta
        poll(engine)


def complete_period(engine: TimerEngine, clock: FakeClock) -> None:
    """Fast-forward the running countdown past zero and let the ticker see it."""
    clock.advance(engine.get_state().remaining_seconds + 1)
    poll(engine)
